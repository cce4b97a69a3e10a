"""Tests for themeramp.errors."""

from pathlib import Path

from themeramp.errors import (
    ERROR_MESSAGES,
    ErrorCode,
    MalformedDocumentError,
    PersistenceError,
    SchemaViolationError,
    ThemeError,
    classify_exception,
    format_error_for_user,
)


def test_every_code_has_a_message():
    assert set(ERROR_MESSAGES) == set(ErrorCode)


def test_default_message_comes_from_code():
    error = ThemeError(ErrorCode.SYSTEM_THEME_READ_ONLY)
    assert error.message == ERROR_MESSAGES[ErrorCode.SYSTEM_THEME_READ_ONLY]


def test_schema_violation_carries_identifier():
    error = SchemaViolationError(ErrorCode.UNKNOWN_UI_COLOR, "bad id", identifier="sparkle")
    assert error.identifier == "sparkle"
    assert error.to_dict()["code"] == "UNKNOWN_UI_COLOR"
    assert error.to_dict()["details"] == {"identifier": "sparkle"}
    assert "UI color: sparkle" in format_error_for_user(error)


def test_malformed_document_reports_file_name():
    error = MalformedDocumentError("broken", path=Path("/tmp/themes/night.json"))
    assert error.code is ErrorCode.DOCUMENT_MALFORMED
    assert "File: night.json" in format_error_for_user(error)


def test_classify_permission_error():
    error = classify_exception(PermissionError("Permission denied"), Path("x.json"))
    assert isinstance(error, PersistenceError)
    assert error.code is ErrorCode.SAVE_ACCESS_DENIED
    assert error.path == Path("x.json")


def test_classify_disk_full():
    error = classify_exception(OSError(28, "No space left on device"))
    assert error.code is ErrorCode.DISK_FULL


def test_classify_other_errors_as_save_failed():
    error = classify_exception(OSError("device busy"))
    assert error.code is ErrorCode.SAVE_FAILED
    assert "device busy" in error.message


def test_format_plain_exception():
    assert "device busy" in format_error_for_user(OSError("device busy"))

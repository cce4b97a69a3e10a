"""Theme document parsing and validation."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Mapping

import yaml

from themeramp.errors import ErrorCode, MalformedDocumentError, SchemaViolationError
from themeramp.themes.color import DEFAULT_CATALOG, ColorRamp, Hsla, RampCatalog, RampSet, hsla
from themeramp.themes.constants import (
    FAMILY_KEYS,
    RAMP_LENGTH,
    RAMP_SET_KEYS,
    THEME_KEYS,
    THEME_SCHEMA_VERSION,
)
from themeramp.themes.models import Appearance, Provenance, Theme, ThemeFamily
from themeramp.themes.schema import SCHEMA_INDEX, ColorReference, ScaleRef, StaticColor

_RAMP_SET_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")
_REFERENCE_KEYS = {"scale", "role", "index"}
_ROLES = {"solid": False, "transparent": True}

_MAX_DOCUMENT_BYTES = 256 * 1024
_MAX_SHORT_FIELD_LEN = 120
_MAX_METADATA_VALUE_LEN = 240
_MAX_RAMP_SET_NAME_LEN = 40


def load_theme_family(path: Path) -> ThemeFamily:
    """Load and validate one user theme family document (.json, .yaml or .yml)."""
    path = Path(path)
    if not path.is_file():
        raise MalformedDocumentError(
            f"Theme path is not a file: {path}",
            path=path,
            code=ErrorCode.DOCUMENT_UNREADABLE,
        )
    data = _load_document(path)
    return parse_family_document(data, source=path)


def parse_family_document(data: object, *, source: Path | None = None) -> ThemeFamily:
    """Build a user-provenance family from an already decoded document."""
    context = str(source) if source is not None else "<document>"
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(f"{context}: expected a mapping at the top level", path=source)
    _reject_unknown_keys(data, allowed=set(FAMILY_KEYS), context=context)

    schema_version = data.get("schema_version", THEME_SCHEMA_VERSION)
    if str(schema_version) != THEME_SCHEMA_VERSION:
        raise MalformedDocumentError(
            f"{context}: unsupported schema_version {schema_version!r}; expected {THEME_SCHEMA_VERSION!r}",
            path=source,
        )

    name = _required_str(data, "name", context, max_len=_MAX_SHORT_FIELD_LEN)
    author = _required_str(data, "author", context, max_len=_MAX_SHORT_FIELD_LEN)
    metadata = _parse_metadata(data.get("metadata"), context)
    scales = _parse_scales(data.get("scales"), context)
    catalog = scales.merged_over(DEFAULT_CATALOG) if scales else DEFAULT_CATALOG
    overrides = _parse_overrides(data.get("overrides"), catalog, f"{context}: overrides")

    raw_themes = data.get("themes", [])
    if not isinstance(raw_themes, list):
        raise MalformedDocumentError(f"{context}: 'themes' must be a list", path=source)
    themes = tuple(
        _parse_theme(raw, catalog, f"{context}: themes[{position}]")
        for position, raw in enumerate(raw_themes)
    )

    return ThemeFamily(
        name=name,
        author=author,
        themes=themes,
        scales=scales,
        overrides=overrides,
        metadata=metadata,
        provenance=Provenance.USER,
    )


def parse_color_reference(value: object, context: str) -> ColorReference:
    """Parse a literal ``[h, s, l, a]`` color or a ramp reference."""
    if isinstance(value, str):
        try:
            return ScaleRef.from_token(value)
        except ValueError as exc:
            raise MalformedDocumentError(f"{context}: {exc}") from exc
    if isinstance(value, Mapping):
        _reject_unknown_keys(value, allowed=_REFERENCE_KEYS, context=context)
        scale = value.get("scale")
        role = value.get("role", "solid")
        index = value.get("index")
        if not isinstance(scale, str) or not scale:
            raise MalformedDocumentError(f"{context}: reference 'scale' must be a non-empty string")
        if not isinstance(role, str) or role not in _ROLES:
            raise MalformedDocumentError(f"{context}: reference 'role' must be 'solid' or 'transparent'")
        if isinstance(index, bool) or not isinstance(index, int):
            raise MalformedDocumentError(f"{context}: reference 'index' must be an integer")
        return ScaleRef(scale, index, transparent=_ROLES[role])
    return StaticColor(_parse_literal(value, context))


def _parse_literal(value: object, context: str) -> Hsla:
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        raise MalformedDocumentError(f"{context}: color must be [h, s, l, a] or a ramp reference")
    channels: list[float] = []
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, (int, float)):
            raise MalformedDocumentError(f"{context}: color channels must be numbers")
        channels.append(float(channel))
    return hsla(*channels)


def _parse_metadata(raw: object, context: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(f"{context}: 'metadata' must be a mapping")
    metadata: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise MalformedDocumentError(f"{context}: metadata keys and values must be strings")
        if len(value) > _MAX_METADATA_VALUE_LEN:
            raise MalformedDocumentError(f"{context}: metadata {key!r} value is too long")
        metadata[key] = value
    return metadata


def _parse_scales(raw: object, context: str) -> RampCatalog | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(f"{context}: 'scales' must be a mapping")
    ramp_sets: list[RampSet] = []
    for name, ramps in raw.items():
        where = f"{context}: scales[{name!r}]"
        if (
            not isinstance(name, str)
            or len(name) > _MAX_RAMP_SET_NAME_LEN
            or not _RAMP_SET_NAME_RE.match(name)
        ):
            raise MalformedDocumentError(f"{where}: ramp set name must match pattern [a-z0-9_-]")
        if not isinstance(ramps, Mapping):
            raise MalformedDocumentError(f"{where}: expected a mapping of ramps")
        _reject_unknown_keys(ramps, allowed=set(RAMP_SET_KEYS), context=where)
        missing = [key for key in RAMP_SET_KEYS if key not in ramps]
        if missing:
            raise MalformedDocumentError(f"{where}: missing ramps: {', '.join(missing)}")
        parsed = {key: _parse_ramp(ramps[key], f"{where}.{key}") for key in RAMP_SET_KEYS}
        ramp_sets.append(RampSet(name=name, **parsed))
    return RampCatalog(ramp_sets) if ramp_sets else None


def _parse_ramp(raw: object, context: str) -> ColorRamp:
    if not isinstance(raw, list) or len(raw) != RAMP_LENGTH:
        raise MalformedDocumentError(f"{context}: a ramp must be a list of {RAMP_LENGTH} colors")
    return ColorRamp(tuple(_parse_literal(item, f"{context}[{step}]") for step, item in enumerate(raw)))


def _parse_overrides(raw: object, catalog: RampCatalog, context: str) -> dict[str, ColorReference]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(f"{context}: expected a mapping of UI color overrides")
    overrides: dict[str, ColorReference] = {}
    for identifier, value in raw.items():
        if identifier not in SCHEMA_INDEX:
            raise SchemaViolationError(
                ErrorCode.UNKNOWN_UI_COLOR,
                f"{context}: unknown UI color {identifier!r}",
                identifier=str(identifier),
            )
        reference = parse_color_reference(value, f"{context}[{identifier!r}]")
        _check_reference(reference, catalog, identifier, context)
        overrides[identifier] = reference
    return overrides


def _check_reference(reference: ColorReference, catalog: RampCatalog, identifier: str, context: str) -> None:
    if not isinstance(reference, ScaleRef):
        return
    if reference.scale not in catalog:
        raise SchemaViolationError(
            ErrorCode.UNKNOWN_RAMP_SET,
            f"{context}: {identifier!r} references unknown ramp set {reference.scale!r}",
            identifier=identifier,
            scale=reference.scale,
        )
    if not 0 <= reference.index < RAMP_LENGTH:
        raise SchemaViolationError(
            ErrorCode.RAMP_INDEX_OUT_OF_RANGE,
            f"{context}: {identifier!r} uses ramp index {reference.index} outside 0-{RAMP_LENGTH - 1}",
            identifier=identifier,
            index=reference.index,
        )


def _parse_theme(raw: object, catalog: RampCatalog, context: str) -> Theme:
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(f"{context}: expected a mapping")
    _reject_unknown_keys(raw, allowed=set(THEME_KEYS), context=context)
    name = _required_str(raw, "name", context, max_len=_MAX_SHORT_FIELD_LEN)
    appearance = raw.get("appearance")
    if appearance not in {item.value for item in Appearance}:
        raise MalformedDocumentError(f"{context}: 'appearance' must be 'light' or 'dark', got {appearance!r}")
    overrides = _parse_overrides(raw.get("overrides"), catalog, f"{context}.overrides")
    return Theme(name=name, appearance=Appearance(appearance), overrides=overrides)


def _required_str(data: Mapping[str, object], key: str, context: str, *, max_len: int) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise MalformedDocumentError(f"{context}: field {key!r} must be a non-empty string")
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise MalformedDocumentError(f"{context}: field {key!r} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise MalformedDocumentError(f"{context}: field {key!r} must be a single line string")
    return cleaned


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise MalformedDocumentError(f"{context}: unsupported keys found: {joined}")


def _load_document(path: Path) -> object:
    content = _read_text_limited(path, max_bytes=_MAX_DOCUMENT_BYTES)
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedDocumentError(f"Invalid JSON in {path}: {exc}", path=path) from exc
    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise MalformedDocumentError(f"Invalid YAML in {path}: {exc}", path=path) from exc
    raise MalformedDocumentError(f"Unsupported theme file type: {path.name}", path=path)


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise MalformedDocumentError(
            f"Unable to stat {path}: {exc}", path=path, code=ErrorCode.DOCUMENT_UNREADABLE
        ) from exc
    if size > max_bytes:
        raise MalformedDocumentError(
            f"{path}: file exceeds max size ({max_bytes} bytes)",
            path=path,
            code=ErrorCode.DOCUMENT_TOO_LARGE,
        )
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(
            f"Unable to read {path}: {exc}", path=path, code=ErrorCode.DOCUMENT_UNREADABLE
        ) from exc

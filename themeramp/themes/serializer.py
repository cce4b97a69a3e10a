"""Writing user theme families back to JSON or YAML documents."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

import yaml

from themeramp.errors import ErrorCode, ThemeError, classify_exception
from themeramp.themes.color import ColorRamp, Hsla
from themeramp.themes.constants import RAMP_SET_KEYS
from themeramp.themes.models import OverrideMap, Theme, ThemeFamily
from themeramp.themes.schema import ColorReference, ScaleRef, StaticColor

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def color_to_document(color: Hsla) -> list[float]:
    return list(color.to_tuple())


def reference_to_document(reference: ColorReference) -> str | list[float]:
    if isinstance(reference, ScaleRef):
        return reference.to_token()
    if isinstance(reference, StaticColor):
        return color_to_document(reference.color)
    raise TypeError(f"Unsupported color reference: {reference!r}")


def _overrides_to_document(overrides: OverrideMap) -> dict[str, Any]:
    return {identifier: reference_to_document(reference) for identifier, reference in overrides.items()}


def _ramp_to_document(ramp: ColorRamp) -> list[list[float]]:
    return [color_to_document(color) for color in ramp]


def _theme_to_document(theme: Theme) -> dict[str, Any]:
    document: dict[str, Any] = {"name": theme.name, "appearance": theme.appearance.value}
    if theme.overrides:
        document["overrides"] = _overrides_to_document(theme.overrides)
    return document


def family_to_document(family: ThemeFamily) -> dict[str, Any]:
    """Document for ``family`` containing only the fields it actually sets."""
    document: dict[str, Any] = {"name": family.name, "author": family.author}
    if family.metadata:
        document["metadata"] = dict(family.metadata)
    if family.scales is not None:
        document["scales"] = {
            name: {key: _ramp_to_document(getattr(ramp_set, key)) for key in RAMP_SET_KEYS}
            for name, ramp_set in family.scales.items()
        }
    if family.overrides:
        document["overrides"] = _overrides_to_document(family.overrides)
    if family.themes:
        document["themes"] = [_theme_to_document(theme) for theme in family.themes]
    return document


def dump_family(family: ThemeFamily, *, fmt: str = "json") -> str:
    document = family_to_document(family)
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported theme format: {fmt!r}")


def theme_file_name(family_name: str, suffix: str = ".json") -> str:
    """File name for a family, e.g. ``"Default (Custom)"`` -> ``default-custom.json``."""
    slug = _SLUG_RE.sub("-", family_name.lower()).strip("-") or "theme"
    return f"{slug}{suffix}"


def save_theme_family(family: ThemeFamily, path: Path) -> Path:
    """Atomically write a user family to ``path`` (.json, .yaml or .yml)."""
    if family.is_system:
        raise ThemeError(ErrorCode.SYSTEM_THEME_READ_ONLY, path=path, details={"family": family.name})
    path = Path(path)
    fmt = "yaml" if path.suffix.lower() in {".yaml", ".yml"} else "json"
    text = dump_family(family, fmt=fmt)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise classify_exception(exc, path) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
    return path

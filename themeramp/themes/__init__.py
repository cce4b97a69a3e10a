"""Theme resolution framework exports."""

from themeramp.themes.builtin import DEFAULT_THEME_REF, SYSTEM_FAMILIES
from themeramp.themes.color import DEFAULT_CATALOG, ColorRamp, Hsla, RampCatalog, RampRole, RampSet, hsla
from themeramp.themes.convert import apply_edit
from themeramp.themes.loader import load_theme_family
from themeramp.themes.models import (
    Appearance,
    EditMode,
    Provenance,
    Theme,
    ThemeFamily,
    ThemeRef,
    ThemeSummary,
)
from themeramp.themes.registry import ThemeRegistry
from themeramp.themes.resolver import UIColors, resolve
from themeramp.themes.schema import UI_COLOR_SCHEMA, ScaleRef, StaticColor, UIColorSpec
from themeramp.themes.serializer import save_theme_family

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_THEME_REF",
    "SYSTEM_FAMILIES",
    "UI_COLOR_SCHEMA",
    "Appearance",
    "ColorRamp",
    "EditMode",
    "Hsla",
    "Provenance",
    "RampCatalog",
    "RampRole",
    "RampSet",
    "ScaleRef",
    "StaticColor",
    "Theme",
    "ThemeFamily",
    "ThemeRef",
    "ThemeRegistry",
    "ThemeSummary",
    "UIColorSpec",
    "UIColors",
    "apply_edit",
    "hsla",
    "load_theme_family",
    "resolve",
    "save_theme_family",
]

"""Theme framework constants."""

from __future__ import annotations

THEME_SCHEMA_VERSION = "1"

RAMP_LENGTH = 12

DEFAULT_FAMILY_NAME = "Default"
DEFAULT_LIGHT_THEME_NAME = "Default Light"
DEFAULT_DARK_THEME_NAME = "Default Dark"

USER_FAMILY_SUFFIX = "Custom"

THEME_FILE_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")

FAMILY_KEYS: tuple[str, ...] = (
    "schema_version",
    "name",
    "author",
    "metadata",
    "scales",
    "overrides",
    "themes",
)

THEME_KEYS: tuple[str, ...] = (
    "name",
    "appearance",
    "overrides",
)

RAMP_SET_KEYS: tuple[str, ...] = (
    "light",
    "dark",
    "light_alpha",
    "dark_alpha",
)

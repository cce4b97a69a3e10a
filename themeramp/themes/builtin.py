"""Built-in (system) theme families, compiled from constant data."""

from __future__ import annotations

from themeramp.themes.color import RampCatalog, build_ramp_set, hsla
from themeramp.themes.constants import (
    DEFAULT_DARK_THEME_NAME,
    DEFAULT_FAMILY_NAME,
    DEFAULT_LIGHT_THEME_NAME,
)
from themeramp.themes.models import Appearance, Provenance, Theme, ThemeFamily, ThemeRef
from themeramp.themes.schema import ScaleRef, StaticColor

DEFAULT_THEME_REF = ThemeRef(DEFAULT_FAMILY_NAME, DEFAULT_LIGHT_THEME_NAME)

DEFAULT_FAMILY = ThemeFamily(
    name=DEFAULT_FAMILY_NAME,
    author="ThemeRamp",
    themes=(
        Theme(DEFAULT_LIGHT_THEME_NAME, Appearance.LIGHT),
        Theme(DEFAULT_DARK_THEME_NAME, Appearance.DARK),
    ),
    metadata={"description": "Neutral gray surfaces with a blue accent."},
    provenance=Provenance.SYSTEM,
)

EMBER_FAMILY = ThemeFamily(
    name="Ember",
    author="ThemeRamp",
    scales=RampCatalog(
        (
            build_ramp_set("ember", 0.05, 0.85),
            build_ramp_set("red", 0.98, 0.78),
        )
    ),
    overrides={
        "accent-background": ScaleRef("ember", 8),
        "accent-hover-background": ScaleRef("ember", 9),
        "focus-ring": ScaleRef("ember", 7),
        "text-accent": ScaleRef("ember", 10),
        "selected-element-background": ScaleRef("ember", 4, transparent=True),
    },
    themes=(
        Theme("Ember Light", Appearance.LIGHT),
        Theme(
            "Ember Dark",
            Appearance.DARK,
            overrides={"shadow": StaticColor(hsla(0.0, 0.0, 0.0, 0.5))},
        ),
    ),
    metadata={"description": "Warm orange accent on neutral surfaces."},
    provenance=Provenance.SYSTEM,
)

SYSTEM_FAMILIES: tuple[ThemeFamily, ...] = (DEFAULT_FAMILY, EMBER_FAMILY)

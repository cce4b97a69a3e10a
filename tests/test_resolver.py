"""Tests for resolving themes into UI colors."""

from __future__ import annotations

import pytest

from themeramp.errors import ErrorCode, SchemaViolationError
from themeramp.themes.builtin import DEFAULT_FAMILY, EMBER_FAMILY
from themeramp.themes.color import DEFAULT_CATALOG, RampCatalog, build_ramp_set, hsla
from themeramp.themes.models import Appearance, Theme, ThemeFamily, ThemeRef
from themeramp.themes.resolver import ResolutionCache, resolve, resolve_reference
from themeramp.themes.schema import SCHEMA_IDS, UI_COLOR_SCHEMA, ScaleRef, StaticColor


def _family(*themes: Theme, overrides=None, scales=None) -> ThemeFamily:
    return ThemeFamily(
        name="Test",
        author="tests",
        themes=themes or (Theme("Test Light", Appearance.LIGHT),),
        overrides=overrides or {},
        scales=scales,
    )


def _expected_default(appearance: Appearance) -> dict:
    return {
        spec.id: resolve_reference(spec.default, DEFAULT_CATALOG, appearance)
        for spec in UI_COLOR_SCHEMA
    }


@pytest.mark.parametrize("appearance", [Appearance.LIGHT, Appearance.DARK])
def test_family_without_overrides_resolves_to_schema_defaults(appearance: Appearance) -> None:
    theme = Theme("Plain", appearance)
    family = _family(theme)

    colors = resolve(family, family.get_theme("Plain"))

    assert list(colors) == list(SCHEMA_IDS)
    assert dict(colors) == _expected_default(appearance)


def test_filled_element_background_uses_gray_step_four() -> None:
    theme = DEFAULT_FAMILY.get_theme("Default Light")
    colors = resolve(DEFAULT_FAMILY, theme)

    expected = DEFAULT_CATALOG["gray"].light[4]
    assert expected == hsla(0.0, 0.0, 0.88)
    assert colors["filled-element-background"] == expected
    assert colors.filled_element_background == expected


def test_dark_theme_reads_dark_ramps() -> None:
    colors = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.get_theme("Default Dark"))
    assert colors["filled-element-background"] == DEFAULT_CATALOG["gray"].dark[4]
    assert colors["scrollbar-thumb"] == DEFAULT_CATALOG["gray"].dark_alpha[5]


def test_theme_override_replaces_only_that_color() -> None:
    base = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.get_theme("Default Light"))
    literal = hsla(0.3, 0.6, 0.4, 1.0)
    theme = Theme(
        "Edited",
        Appearance.LIGHT,
        overrides={"filled-element-background": StaticColor(literal)},
    )

    colors = resolve(_family(theme), theme)

    assert colors["filled-element-background"] == literal
    assert colors.differing_ids(base) == ["filled-element-background"]


def test_theme_override_wins_over_family_override() -> None:
    theme = Theme("Mine", Appearance.LIGHT, overrides={"text": ScaleRef("red", 9)})
    family = _family(theme, overrides={"text": ScaleRef("blue", 9), "border": ScaleRef("green", 3)})

    colors = resolve(family, family.get_theme("Mine"))

    assert colors["text"] == DEFAULT_CATALOG["red"].light[9]
    assert colors["border"] == DEFAULT_CATALOG["green"].light[3]


def test_static_color_ignores_appearance() -> None:
    light = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.get_theme("Default Light"))
    dark = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.get_theme("Default Dark"))
    assert light["brand-mark"] == dark["brand-mark"]


def test_family_scales_shadow_default_ramps() -> None:
    purple = build_ramp_set("gray", 0.8, 0.3)
    family = _family(scales=RampCatalog([purple]))

    colors = resolve(family, family.themes[0])

    assert colors["filled-element-background"] == purple.light[4]
    assert colors["success"] == DEFAULT_CATALOG["green"].light[8]


def test_ember_family_overrides_apply_to_both_themes() -> None:
    catalog = EMBER_FAMILY.effective_catalog()
    light = resolve(EMBER_FAMILY, EMBER_FAMILY.get_theme("Ember Light"))
    dark = resolve(EMBER_FAMILY, EMBER_FAMILY.get_theme("Ember Dark"))

    assert light["accent-background"] == catalog["ember"].light[8]
    assert dark["accent-background"] == catalog["ember"].dark[8]
    assert dark["shadow"] == hsla(0.0, 0.0, 0.0, 0.5)


def test_resolution_is_repeatable() -> None:
    theme = EMBER_FAMILY.get_theme("Ember Dark")
    assert dict(resolve(EMBER_FAMILY, theme)) == dict(resolve(EMBER_FAMILY, theme))


def test_index_twelve_is_rejected() -> None:
    theme = Theme("Broken", Appearance.LIGHT, overrides={"border": ScaleRef("gray", 12)})

    with pytest.raises(SchemaViolationError) as excinfo:
        resolve(_family(theme), theme)

    assert excinfo.value.code is ErrorCode.RAMP_INDEX_OUT_OF_RANGE
    assert excinfo.value.identifier == "border"


def test_boolean_index_is_rejected() -> None:
    with pytest.raises(SchemaViolationError) as excinfo:
        resolve_reference(ScaleRef("gray", True), DEFAULT_CATALOG, Appearance.LIGHT, identifier="border")

    assert excinfo.value.code is ErrorCode.RAMP_INDEX_OUT_OF_RANGE


def test_unknown_ramp_set_is_rejected() -> None:
    theme = Theme("Broken", Appearance.DARK, overrides={"text": ScaleRef("teal", 3)})

    with pytest.raises(SchemaViolationError) as excinfo:
        resolve(_family(theme), theme)

    assert excinfo.value.code is ErrorCode.UNKNOWN_RAMP_SET
    assert excinfo.value.identifier == "text"


def test_unknown_attribute_raises_attribute_error() -> None:
    colors = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.themes[0])
    with pytest.raises(AttributeError):
        colors.not_a_ui_color


def test_cache_invalidates_one_family() -> None:
    cache = ResolutionCache()
    colors = resolve(DEFAULT_FAMILY, DEFAULT_FAMILY.themes[0])
    cache.put(ThemeRef("Default", "Default Light"), colors)
    cache.put(ThemeRef("Ember", "Ember Light"), colors)

    cache.invalidate_family("Default")

    assert cache.get(ThemeRef("Default", "Default Light")) is None
    assert cache.get(ThemeRef("Ember", "Ember Light")) is colors
    assert len(cache) == 1

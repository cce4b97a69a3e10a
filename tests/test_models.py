"""Tests for theme and theme family invariants."""

from __future__ import annotations

import pytest

from themeramp.errors import ErrorCode, InvariantViolationError, SchemaViolationError
from themeramp.themes.builtin import DEFAULT_FAMILY, EMBER_FAMILY, SYSTEM_FAMILIES
from themeramp.themes.color import DEFAULT_CATALOG, RampCatalog, build_ramp_set
from themeramp.themes.models import Appearance, Provenance, Theme, ThemeFamily
from themeramp.themes.schema import SCHEMA_IDS, ScaleRef, get_spec


def test_family_without_themes_or_scales_is_rejected() -> None:
    with pytest.raises(InvariantViolationError) as excinfo:
        ThemeFamily(name="Empty", author="tests")
    assert excinfo.value.code is ErrorCode.EMPTY_FAMILY


def test_scales_only_family_is_allowed() -> None:
    family = ThemeFamily(
        name="Palette",
        author="tests",
        scales=RampCatalog([build_ramp_set("blue", 0.7, 0.6)]),
    )
    assert family.themes == ()
    assert family.effective_catalog()["blue"] != DEFAULT_CATALOG["blue"]


def test_duplicate_theme_names_are_rejected() -> None:
    with pytest.raises(InvariantViolationError):
        ThemeFamily(
            name="Twice",
            author="tests",
            themes=(Theme("Same", Appearance.LIGHT), Theme("Same", Appearance.DARK)),
        )


def test_invalid_appearance_is_rejected() -> None:
    with pytest.raises(InvariantViolationError):
        Theme("Odd", "dim")  # type: ignore[arg-type]


def test_unknown_override_identifier_is_rejected() -> None:
    with pytest.raises(SchemaViolationError) as excinfo:
        Theme("Bad", Appearance.LIGHT, overrides={"no-such-color": ScaleRef("gray", 1)})
    assert excinfo.value.code is ErrorCode.UNKNOWN_UI_COLOR


def test_themes_point_back_to_family_by_name() -> None:
    family = ThemeFamily(name="Owner", author="tests", themes=(Theme("One", Appearance.DARK),))
    theme = family.get_theme("One")
    assert theme is not None
    assert theme.family == "Owner"
    assert theme.ref == ("Owner", "One")


def test_overrides_are_read_only_and_in_schema_order() -> None:
    theme = Theme(
        "Ordered",
        Appearance.LIGHT,
        overrides={"text": ScaleRef("gray", 9), "app-background": ScaleRef("gray", 1)},
    )
    assert list(theme.overrides) == ["app-background", "text"]
    with pytest.raises(TypeError):
        theme.overrides["border"] = ScaleRef("gray", 2)  # type: ignore[index]


def test_with_override_returns_new_theme() -> None:
    theme = Theme("Base", Appearance.LIGHT)
    edited = theme.with_override("border", ScaleRef("red", 5))
    assert dict(theme.overrides) == {}
    assert dict(edited.overrides) == {"border": ScaleRef("red", 5)}


def test_with_theme_replaces_same_named_theme() -> None:
    family = ThemeFamily(
        name="Mine",
        author="tests",
        themes=(Theme("A", Appearance.LIGHT), Theme("B", Appearance.DARK)),
    )
    updated = family.with_theme(Theme("A", Appearance.LIGHT, overrides={"text": ScaleRef("red", 11)}))
    assert updated.theme_names() == ["A", "B"]
    assert "text" in updated.get_theme("A").overrides
    assert dict(family.get_theme("A").overrides) == {}


def test_system_families_are_tagged_system() -> None:
    assert all(family.provenance is Provenance.SYSTEM for family in SYSTEM_FAMILIES)
    assert DEFAULT_FAMILY.scales is None
    assert EMBER_FAMILY.scales is not None


def test_schema_ids_are_unique_and_described() -> None:
    assert len(set(SCHEMA_IDS)) == len(SCHEMA_IDS)
    spec = get_spec("filled-element-background")
    assert spec.name == "Filled Element Background"
    assert spec.default == ScaleRef("gray", 4)
    assert spec.description


def test_unknown_schema_id_is_reported() -> None:
    with pytest.raises(SchemaViolationError):
        get_spec("sparkles")


def test_scale_ref_tokens() -> None:
    assert ScaleRef("gray", 4).to_token() == "gray.4"
    assert ScaleRef("blue", 3, transparent=True).to_token() == "blue.alpha.3"
    assert ScaleRef.from_token("blue.alpha.3") == ScaleRef("blue", 3, transparent=True)
    with pytest.raises(ValueError):
        ScaleRef.from_token("blue/3")

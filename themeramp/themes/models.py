"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from themeramp.errors import ErrorCode, InvariantViolationError
from themeramp.themes.color import DEFAULT_CATALOG, RampCatalog
from themeramp.themes.schema import SCHEMA_IDS, ColorReference, ScaleRef, StaticColor, get_spec

OverrideMap = Mapping[str, ColorReference]

_EMPTY: Mapping = MappingProxyType({})


class Appearance(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Provenance(str, Enum):
    """Where a theme family comes from."""

    SYSTEM = "system"
    USER = "user"


class EditMode(str, Enum):
    """How an edited system theme is stored.

    ``delta`` keeps only the changed UI colors so untouched ones keep
    following the ramp catalog. ``snapshot`` freezes every resolved color.
    """

    DELTA = "delta"
    SNAPSHOT = "snapshot"


def freeze_overrides(overrides: Mapping[str, ColorReference] | None) -> Mapping[str, ColorReference]:
    """Validate an override map and return a read-only copy in schema order."""
    if not overrides:
        return _EMPTY
    for identifier, reference in overrides.items():
        get_spec(identifier)
        if not isinstance(reference, (ScaleRef, StaticColor)):
            raise TypeError(f"Override for {identifier!r} is not a color reference: {reference!r}")
    ordered = {identifier: overrides[identifier] for identifier in SCHEMA_IDS if identifier in overrides}
    return MappingProxyType(ordered)


@dataclass(frozen=True)
class Theme:
    """A named appearance plus its own overrides.

    ``family`` holds the owning family's name, not the family itself.
    """

    name: str
    appearance: Appearance
    overrides: OverrideMap = field(default_factory=dict)
    family: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvariantViolationError(ErrorCode.INVALID_THEME, "Theme name must be a non-empty string")
        try:
            appearance = Appearance(self.appearance)
        except ValueError:
            raise InvariantViolationError(
                ErrorCode.INVALID_THEME,
                f"Theme {self.name!r} has invalid appearance {self.appearance!r}",
            ) from None
        object.__setattr__(self, "appearance", appearance)
        object.__setattr__(self, "overrides", freeze_overrides(self.overrides))

    @property
    def ref(self) -> ThemeRef:
        return ThemeRef(self.family, self.name)

    def with_override(self, identifier: str, reference: ColorReference) -> Theme:
        overrides = dict(self.overrides)
        overrides[identifier] = reference
        return replace(self, overrides=overrides)

    def without_override(self, identifier: str) -> Theme:
        overrides = dict(self.overrides)
        overrides.pop(identifier, None)
        return replace(self, overrides=overrides)


@dataclass(frozen=True)
class ThemeFamily:
    """A named group of themes sharing ramp sets and family overrides."""

    name: str
    author: str
    themes: tuple[Theme, ...] = ()
    scales: RampCatalog | None = None
    overrides: OverrideMap = field(default_factory=dict)
    metadata: Mapping[str, str] = field(default_factory=dict)
    provenance: Provenance = Provenance.USER

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvariantViolationError(ErrorCode.INVALID_THEME, "Theme family name must be a non-empty string")
        scales = self.scales
        if scales is not None and not isinstance(scales, RampCatalog):
            scales = RampCatalog(scales)
        if scales is not None and not scales:
            scales = None
        themes = tuple(
            theme if theme.family == self.name else replace(theme, family=self.name)
            for theme in self.themes
        )
        if not themes and scales is None:
            raise InvariantViolationError(
                ErrorCode.EMPTY_FAMILY,
                f"Theme family {self.name!r} has no themes and no ramp sets",
            )
        seen: set[str] = set()
        for theme in themes:
            if theme.name in seen:
                raise InvariantViolationError(
                    ErrorCode.INVALID_THEME,
                    f"Theme family {self.name!r} defines theme {theme.name!r} twice",
                )
            seen.add(theme.name)
        object.__setattr__(self, "scales", scales)
        object.__setattr__(self, "themes", themes)
        object.__setattr__(self, "overrides", freeze_overrides(self.overrides))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))
        object.__setattr__(self, "provenance", Provenance(self.provenance))

    @property
    def is_system(self) -> bool:
        return self.provenance is Provenance.SYSTEM

    @property
    def family_overrides(self) -> OverrideMap:
        return self.overrides

    def theme_names(self) -> list[str]:
        return [theme.name for theme in self.themes]

    def get_theme(self, name: str) -> Theme | None:
        for theme in self.themes:
            if theme.name == name:
                return theme
        return None

    def effective_catalog(self) -> RampCatalog:
        """The default catalog with this family's ramp sets winning per name."""
        if self.scales is None:
            return DEFAULT_CATALOG
        return self.scales.merged_over(DEFAULT_CATALOG)

    def with_theme(self, theme: Theme) -> ThemeFamily:
        """Return a copy with ``theme`` replacing the same-named theme, or appended."""
        themes = list(self.themes)
        for position, existing in enumerate(themes):
            if existing.name == theme.name:
                themes[position] = theme
                break
        else:
            themes.append(theme)
        return replace(self, themes=tuple(themes))


class ThemeRef(NamedTuple):
    """A (family name, theme name) pair."""

    family: str
    theme: str


@dataclass(frozen=True, slots=True)
class ThemeSummary:
    """Display-ready theme metadata."""

    family: str
    theme: str
    appearance: Appearance
    author: str
    provenance: Provenance

    @property
    def ref(self) -> ThemeRef:
        return ThemeRef(self.family, self.theme)

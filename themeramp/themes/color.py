"""Colors, color ramps and ramp catalogs.

A ramp is a 12 step gradation. Light ramps run lightest to darkest and dark
ramps run darkest to lightest; the ordering is a convention and is not
checked numerically.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from themeramp.errors import ErrorCode, InvariantViolationError
from themeramp.themes.constants import RAMP_LENGTH


def _clamp(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


@dataclass(frozen=True, slots=True)
class Hsla:
    """An absolute color with hue, saturation, lightness and alpha in [0, 1]."""

    h: float
    s: float
    l: float
    a: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "h", _clamp(self.h))
        object.__setattr__(self, "s", _clamp(self.s))
        object.__setattr__(self, "l", _clamp(self.l))
        object.__setattr__(self, "a", _clamp(self.a))

    def with_alpha(self, alpha: float) -> Hsla:
        return Hsla(self.h, self.s, self.l, alpha)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.h, self.s, self.l, self.a)


def hsla(h: float, s: float, l: float, a: float = 1.0) -> Hsla:
    """Build a clamped color."""
    return Hsla(h, s, l, a)


@dataclass(frozen=True, slots=True)
class ColorRamp:
    """Exactly twelve colors, index 0 to 11."""

    colors: tuple[Hsla, ...]

    def __post_init__(self) -> None:
        colors = tuple(self.colors)
        if len(colors) != RAMP_LENGTH:
            raise InvariantViolationError(
                ErrorCode.INVALID_RAMP,
                f"Color ramp must have {RAMP_LENGTH} colors, got {len(colors)}",
            )
        if not all(isinstance(color, Hsla) for color in colors):
            raise InvariantViolationError(ErrorCode.INVALID_RAMP, "Color ramp entries must be Hsla colors")
        object.__setattr__(self, "colors", colors)

    def __getitem__(self, index: int) -> Hsla:
        return self.colors[index]

    def __iter__(self) -> Iterator[Hsla]:
        return iter(self.colors)

    def __len__(self) -> int:
        return RAMP_LENGTH


class RampRole(str, Enum):
    """The four ramps of a ramp set."""

    SOLID_LIGHT = "solid-light"
    SOLID_DARK = "solid-dark"
    TRANSPARENT_LIGHT = "transparent-light"
    TRANSPARENT_DARK = "transparent-dark"

    @classmethod
    def select(cls, appearance: str, transparent: bool) -> RampRole:
        dark = appearance == "dark"
        if transparent:
            return cls.TRANSPARENT_DARK if dark else cls.TRANSPARENT_LIGHT
        return cls.SOLID_DARK if dark else cls.SOLID_LIGHT


@dataclass(frozen=True, slots=True)
class RampSet:
    """Four related ramps covering solid/transparent x light/dark."""

    name: str
    light: ColorRamp
    dark: ColorRamp
    light_alpha: ColorRamp
    dark_alpha: ColorRamp

    def __post_init__(self) -> None:
        if not self.name:
            raise InvariantViolationError(ErrorCode.INCOMPLETE_RAMP_SET, "Ramp set name must not be empty")
        for role in ("light", "dark", "light_alpha", "dark_alpha"):
            if not isinstance(getattr(self, role), ColorRamp):
                raise InvariantViolationError(
                    ErrorCode.INCOMPLETE_RAMP_SET,
                    f"Ramp set {self.name!r} is missing its {role} ramp",
                )

    def ramp(self, role: RampRole) -> ColorRamp:
        if role is RampRole.SOLID_LIGHT:
            return self.light
        if role is RampRole.SOLID_DARK:
            return self.dark
        if role is RampRole.TRANSPARENT_LIGHT:
            return self.light_alpha
        return self.dark_alpha


class RampCatalog(Mapping[str, RampSet]):
    """Immutable mapping of ramp set name to ramp set, iterated by name."""

    __slots__ = ("_sets",)

    def __init__(self, sets: Iterable[RampSet] | Mapping[str, RampSet] = ()) -> None:
        items = sets.items() if isinstance(sets, Mapping) else ((s.name, s) for s in sets)
        collected: dict[str, RampSet] = {}
        for name, ramp_set in items:
            if name != ramp_set.name:
                raise InvariantViolationError(
                    ErrorCode.INCOMPLETE_RAMP_SET,
                    f"Ramp set {ramp_set.name!r} registered under name {name!r}",
                )
            collected[name] = ramp_set
        self._sets = {name: collected[name] for name in sorted(collected)}

    def __getitem__(self, name: str) -> RampSet:
        return self._sets[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RampCatalog):
            return self._sets == other._sets
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._sets.items()))

    def __repr__(self) -> str:
        return f"RampCatalog({list(self._sets)!r})"

    def merged_over(self, base: RampCatalog) -> RampCatalog:
        """Return ``base`` with this catalog's entries winning per name."""
        merged = dict(base._sets)
        merged.update(self._sets)
        return RampCatalog(merged)


# name -> (hue, saturation). Steps are generated the same way for each hue.
_DEFAULT_RAMP_SPECS: tuple[tuple[str, float, float], ...] = (
    ("gray", 0.0, 0.0),
    ("red", 0.0, 0.72),
    ("green", 0.36, 0.55),
    ("blue", 0.6, 0.8),
    ("yellow", 0.14, 0.9),
)

_LIGHT_STEPS: tuple[float, ...] = (
    0.99, 0.975, 0.94, 0.91, 0.88, 0.85, 0.8, 0.73, 0.56, 0.52, 0.44, 0.13,
)
_DARK_STEPS: tuple[float, ...] = (
    0.07, 0.1, 0.14, 0.17, 0.2, 0.23, 0.28, 0.38, 0.44, 0.49, 0.71, 0.93,
)
_LIGHT_ALPHA_STEPS: tuple[float, ...] = (
    0.01, 0.02, 0.06, 0.09, 0.12, 0.15, 0.2, 0.27, 0.44, 0.48, 0.56, 0.87,
)
_DARK_ALPHA_STEPS: tuple[float, ...] = (
    0.02, 0.05, 0.09, 0.12, 0.16, 0.2, 0.26, 0.36, 0.43, 0.48, 0.7, 0.92,
)


def build_ramp_set(name: str, hue: float, saturation: float) -> RampSet:
    """Generate a ramp set for one hue from the shared step tables."""
    return RampSet(
        name=name,
        light=ColorRamp(tuple(hsla(hue, saturation, step) for step in _LIGHT_STEPS)),
        dark=ColorRamp(tuple(hsla(hue, saturation, step) for step in _DARK_STEPS)),
        light_alpha=ColorRamp(
            tuple(hsla(hue, saturation, 0.0, alpha) for alpha in _LIGHT_ALPHA_STEPS)
        ),
        dark_alpha=ColorRamp(
            tuple(hsla(hue, saturation, 1.0, alpha) for alpha in _DARK_ALPHA_STEPS)
        ),
    )


DEFAULT_CATALOG = RampCatalog(
    build_ramp_set(name, hue, saturation) for name, hue, saturation in _DEFAULT_RAMP_SPECS
)

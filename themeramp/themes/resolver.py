"""Resolution of a (family, theme) pair into one color per UI element."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from themeramp.errors import ErrorCode, SchemaViolationError
from themeramp.themes.color import Hsla, RampCatalog, RampRole
from themeramp.themes.constants import RAMP_LENGTH
from themeramp.themes.locking import ReadWriteLock
from themeramp.themes.models import Appearance, Theme, ThemeFamily, ThemeRef
from themeramp.themes.schema import ATTRIBUTE_INDEX, UI_COLOR_SCHEMA, ColorReference, ScaleRef, StaticColor


class UIColors(Mapping[str, Hsla]):
    """Resolved colors keyed by UI color id, in schema order.

    Every schema id is also readable as an attribute, e.g.
    ``colors.filled_element_background``.
    """

    __slots__ = ("_colors",)

    def __init__(self, colors: Mapping[str, Hsla]) -> None:
        self._colors = dict(colors)

    def __getitem__(self, identifier: str) -> Hsla:
        return self._colors[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __getattr__(self, attribute: str) -> Hsla:
        identifier = ATTRIBUTE_INDEX.get(attribute)
        if identifier is None:
            raise AttributeError(attribute)
        return self._colors[identifier]

    def __repr__(self) -> str:
        return f"UIColors({len(self._colors)} colors)"

    def differing_ids(self, other: Mapping[str, Hsla]) -> list[str]:
        """Ids whose color differs from ``other``, in schema order."""
        return [identifier for identifier, color in self._colors.items() if other.get(identifier) != color]


def resolve_reference(
    reference: ColorReference,
    catalog: RampCatalog,
    appearance: Appearance,
    *,
    identifier: str | None = None,
) -> Hsla:
    """Turn one color reference into an absolute color."""
    if isinstance(reference, StaticColor):
        return reference.color
    if isinstance(reference, ScaleRef):
        ramp_set = catalog.get(reference.scale)
        if ramp_set is None:
            raise SchemaViolationError(
                ErrorCode.UNKNOWN_RAMP_SET,
                f"Unknown ramp set {reference.scale!r}",
                identifier=identifier,
                scale=reference.scale,
            )
        if (
            isinstance(reference.index, bool)
            or not isinstance(reference.index, int)
            or not 0 <= reference.index < RAMP_LENGTH
        ):
            raise SchemaViolationError(
                ErrorCode.RAMP_INDEX_OUT_OF_RANGE,
                f"Ramp index {reference.index!r} is outside 0-{RAMP_LENGTH - 1}",
                identifier=identifier,
                index=reference.index,
            )
        role = RampRole.select(appearance, reference.transparent)
        return ramp_set.ramp(role)[reference.index]
    raise TypeError(f"Unsupported color reference: {reference!r}")


def effective_reference(family: ThemeFamily, theme: Theme, identifier: str, default: ColorReference) -> ColorReference:
    """Theme override, else family override, else the schema default."""
    reference = theme.overrides.get(identifier)
    if reference is not None:
        return reference
    reference = family.family_overrides.get(identifier)
    if reference is not None:
        return reference
    return default


def resolve(family: ThemeFamily, theme: Theme) -> UIColors:
    """Resolve every UI color of ``theme`` within ``family``."""
    catalog = family.effective_catalog()
    colors: dict[str, Hsla] = {}
    for spec in UI_COLOR_SCHEMA:
        reference = effective_reference(family, theme, spec.id, spec.default)
        colors[spec.id] = resolve_reference(reference, catalog, theme.appearance, identifier=spec.id)
    return UIColors(colors)


class ResolutionCache:
    """Resolved colors per (family, theme), dropped whenever a family changes."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._entries: dict[ThemeRef, UIColors] = {}

    def get(self, ref: ThemeRef) -> UIColors | None:
        with self._lock.read():
            return self._entries.get(ref)

    def put(self, ref: ThemeRef, colors: UIColors) -> None:
        with self._lock.write():
            self._entries[ref] = colors

    def invalidate_family(self, family_name: str) -> None:
        with self._lock.write():
            for ref in [ref for ref in self._entries if ref.family == family_name]:
                del self._entries[ref]

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

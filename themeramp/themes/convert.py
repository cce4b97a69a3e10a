"""Editing a theme: system themes are copied into user themes first."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from themeramp.errors import ThemeError, classify_exception
from themeramp.themes.color import DEFAULT_CATALOG, RampCatalog
from themeramp.themes.models import EditMode, Provenance, Theme, ThemeFamily
from themeramp.themes.registry import ThemeRegistry
from themeramp.themes.resolver import UIColors, resolve_reference
from themeramp.themes.schema import ColorReference, StaticColor, describe_reference, get_spec

logger = logging.getLogger(__name__)

PersistCallback = Callable[[ThemeFamily], object]

# Serializes saves so the last write always carries the latest family value.
_save_lock = threading.Lock()


def apply_edit(
    registry: ThemeRegistry,
    family_name: str,
    theme_name: str,
    identifier: str,
    reference: ColorReference,
    *,
    author: str | None = None,
    mode: EditMode = EditMode.DELTA,
    persist: PersistCallback | None = None,
) -> Theme:
    """Set one UI color of a theme and return the edited user theme.

    Editing a system theme registers a new user family holding a single
    theme. Editing a user theme updates that theme's overrides. When
    ``persist`` is given it runs after the registry update, outside the
    registry lock; if it fails the registry update is rolled back and a
    ``PersistenceError`` is raised.
    """
    source_family, source_theme = registry.require_theme(family_name, theme_name)
    get_spec(identifier)

    if source_family.provenance is Provenance.USER:
        return _edit_user_theme(registry, family_name, theme_name, identifier, reference, persist)

    resolve_reference(
        reference,
        source_family.effective_catalog(),
        source_theme.appearance,
        identifier=identifier,
    )
    resolved = registry.resolve(family_name, theme_name)
    family = registry.add_unique_family(
        source_family.name,
        lambda name: convert_to_user_family(
            source_family,
            source_theme,
            identifier,
            reference,
            name=name,
            author=author,
            mode=mode,
            resolved=resolved,
        ),
    )
    _persist_or_rollback(
        persist,
        registry,
        family.name,
        rollback=lambda: registry.remove_family(family.name),
    )
    logger.info(
        "converted system theme %s / %s into user family %r (%s)",
        family_name,
        theme_name,
        family.name,
        mode.value,
    )
    return family.themes[0]


def _edit_user_theme(
    registry: ThemeRegistry,
    family_name: str,
    theme_name: str,
    identifier: str,
    reference: ColorReference,
    persist: PersistCallback | None,
) -> Theme:
    previous: list[ColorReference | None] = []

    def _set(family: ThemeFamily, theme: Theme) -> Theme:
        resolve_reference(reference, family.effective_catalog(), theme.appearance, identifier=identifier)
        previous.append(theme.overrides.get(identifier))
        return theme.with_override(identifier, reference)

    def _restore(family: ThemeFamily, theme: Theme) -> Theme:
        if previous[0] is None:
            return theme.without_override(identifier)
        return theme.with_override(identifier, previous[0])

    _, updated = registry.update_theme(family_name, theme_name, _set)
    _persist_or_rollback(
        persist,
        registry,
        family_name,
        rollback=lambda: registry.update_theme(family_name, theme_name, _restore),
    )
    logger.info(
        "set %r to %s in user theme %s / %s",
        identifier,
        describe_reference(reference),
        family_name,
        theme_name,
    )
    return registry.get_theme(family_name, theme_name) or updated.get_theme(theme_name)


def convert_to_user_family(
    source_family: ThemeFamily,
    source_theme: Theme,
    identifier: str,
    reference: ColorReference,
    *,
    name: str,
    author: str | None = None,
    mode: EditMode = EditMode.DELTA,
    resolved: UIColors | None = None,
) -> ThemeFamily:
    """Build the user family that carries an edited copy of ``source_theme``."""
    if mode is EditMode.SNAPSHOT:
        if resolved is None:
            raise ValueError("snapshot conversion needs the resolved source colors")
        overrides: dict[str, ColorReference] = {key: StaticColor(color) for key, color in resolved.items()}
    else:
        overrides = dict(source_theme.overrides)
    overrides[identifier] = reference

    metadata = dict(source_family.metadata)
    metadata["derived_from"] = f"{source_family.name} / {source_theme.name}"
    return ThemeFamily(
        name=name,
        author=author or source_family.author,
        themes=(Theme(source_theme.name, source_theme.appearance, overrides=overrides),),
        scales=catalog_delta(source_family.effective_catalog()),
        overrides=source_family.overrides,
        metadata=metadata,
        provenance=Provenance.USER,
    )


def catalog_delta(catalog: RampCatalog) -> RampCatalog | None:
    """Ramp sets of ``catalog`` that differ from the default catalog, or None."""
    changed = [ramp_set for name, ramp_set in catalog.items() if DEFAULT_CATALOG.get(name) != ramp_set]
    return RampCatalog(changed) if changed else None


def _persist_or_rollback(
    persist: PersistCallback | None,
    registry: ThemeRegistry,
    family_name: str,
    *,
    rollback: Callable[[], object],
) -> None:
    if persist is None:
        return
    try:
        with _save_lock:
            family = registry.get_family(family_name)
            if family is None:
                return
            persist(family)
    except (ThemeError, OSError) as exc:
        logger.warning("saving theme family %r failed; rolling back: %s", family_name, exc)
        try:
            rollback()
        except ThemeError as rollback_exc:
            logger.error("rolling back theme family %r failed: %s", family_name, rollback_exc)
        if isinstance(exc, ThemeError):
            raise
        raise classify_exception(exc) from exc

"""In-memory index of theme families."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from themeramp.errors import ErrorCode, NameCollisionError, ThemeError
from themeramp.themes.builtin import DEFAULT_THEME_REF, SYSTEM_FAMILIES
from themeramp.themes.constants import USER_FAMILY_SUFFIX
from themeramp.themes.loader import load_theme_family
from themeramp.themes.locking import ReadWriteLock
from themeramp.themes.models import Appearance, Theme, ThemeFamily, ThemeRef, ThemeSummary
from themeramp.themes.resolver import ResolutionCache, UIColors, resolve

logger = logging.getLogger(__name__)


class ThemeRegistry:
    """Owns every loaded theme family and the current theme selection.

    Reads (listing, resolving, reading the current theme) run concurrently;
    adding, replacing or removing a family and changing the current theme
    take the lock exclusively.
    """

    def __init__(
        self,
        families: Iterable[ThemeFamily] = SYSTEM_FAMILIES,
        *,
        default_theme: ThemeRef = DEFAULT_THEME_REF,
    ) -> None:
        self._lock = ReadWriteLock()
        self._families: dict[str, ThemeFamily] = {}
        self._default_theme = ThemeRef(*default_theme)
        self._current: ThemeRef | None = None
        self._cache = ResolutionCache()
        self._load_errors: list[str] = []
        for family in families:
            self.add_family(family)

    # -- families --

    def add_family(self, family: ThemeFamily) -> None:
        with self._lock.write():
            if family.name in self._families:
                raise NameCollisionError(
                    ErrorCode.FAMILY_EXISTS,
                    f"Theme family {family.name!r} already exists",
                    family=family.name,
                )
            self._families[family.name] = family
            self._cache.invalidate_family(family.name)
        logger.debug("added %s theme family %r", family.provenance.value, family.name)

    def replace_family(self, family: ThemeFamily) -> ThemeFamily:
        """Swap in a new value for an existing user family and return the old one."""
        with self._lock.write():
            existing = self._families.get(family.name)
            if existing is None:
                raise NameCollisionError(
                    ErrorCode.THEME_NOT_FOUND,
                    f"Theme family {family.name!r} does not exist",
                    family=family.name,
                )
            if existing.is_system or family.is_system:
                raise ThemeError(ErrorCode.SYSTEM_THEME_READ_ONLY, details={"family": family.name})
            self._families[family.name] = family
            self._cache.invalidate_family(family.name)
            self._drop_current_if_missing()
        return existing

    def update_theme(
        self,
        family: str,
        theme: str,
        update: Callable[[ThemeFamily, Theme], Theme],
    ) -> tuple[ThemeFamily, ThemeFamily]:
        """Replace one theme of a user family with ``update(family, theme)``.

        The current family is read and written back under one exclusive
        lock, so concurrent updates never overwrite each other. Returns the
        previous and the new family values.
        """
        with self._lock.write():
            owner, target = self._require(family, theme)
            if owner.is_system:
                raise ThemeError(ErrorCode.SYSTEM_THEME_READ_ONLY, details={"family": family})
            edited = update(owner, target)
            if edited.name != target.name:
                raise ValueError(f"Theme update renamed {target.name!r} to {edited.name!r}")
            updated = owner.with_theme(edited)
            self._families[family] = updated
            self._cache.invalidate_family(family)
        return owner, updated

    def add_unique_family(self, base: str, build: Callable[[str], ThemeFamily]) -> ThemeFamily:
        """Insert ``build(name)`` under the first free user name derived from ``base``."""
        with self._lock.write():
            name = self._unique_name(base)
            family = build(name)
            if family.name != name:
                raise ValueError(f"Built family is named {family.name!r}, expected {name!r}")
            self._families[name] = family
            self._cache.invalidate_family(name)
        logger.debug("added %s theme family %r", family.provenance.value, family.name)
        return family

    def remove_family(self, name: str) -> ThemeFamily:
        """Unload a user family."""
        with self._lock.write():
            existing = self._families.get(name)
            if existing is None:
                raise NameCollisionError(
                    ErrorCode.THEME_NOT_FOUND,
                    f"Theme family {name!r} does not exist",
                    family=name,
                )
            if existing.is_system:
                raise ThemeError(ErrorCode.SYSTEM_THEME_READ_ONLY, details={"family": name})
            del self._families[name]
            self._cache.invalidate_family(name)
            self._drop_current_if_missing()
        logger.debug("removed theme family %r", name)
        return existing

    def unload_user_families(self) -> list[str]:
        with self._lock.write():
            names = [name for name, family in self._families.items() if not family.is_system]
            for name in names:
                del self._families[name]
                self._cache.invalidate_family(name)
            self._drop_current_if_missing()
            self._load_errors = []
        return names

    def get_family(self, name: str) -> ThemeFamily | None:
        with self._lock.read():
            return self._families.get(name)

    def get_theme(self, family: str, theme: str) -> Theme | None:
        with self._lock.read():
            owner = self._families.get(family)
            return owner.get_theme(theme) if owner is not None else None

    def require_theme(self, family: str, theme: str) -> tuple[ThemeFamily, Theme]:
        with self._lock.read():
            return self._require(family, theme)

    def unique_family_name(self, base: str) -> str:
        """First free name of the form ``"<base> (Custom)"``, ``"<base> (Custom 2)"``, ..."""
        with self._lock.read():
            return self._unique_name(base)

    # -- queries --

    def list_families(self) -> list[ThemeFamily]:
        with self._lock.read():
            return [self._families[name] for name in sorted(self._families)]

    def list_themes(self) -> list[ThemeSummary]:
        rows: list[ThemeSummary] = []
        with self._lock.read():
            for name in sorted(self._families):
                family = self._families[name]
                rows.extend(self._summary(family, theme) for theme in family.themes)
        return rows

    def list_light_themes(self) -> list[ThemeSummary]:
        return self._list_by_appearance(Appearance.LIGHT)

    def list_dark_themes(self) -> list[ThemeSummary]:
        return self._list_by_appearance(Appearance.DARK)

    def _list_by_appearance(self, appearance: Appearance) -> list[ThemeSummary]:
        with self._lock.read():
            rows = [
                self._summary(family, theme)
                for family in self._families.values()
                for theme in family.themes
                if theme.appearance is appearance
            ]
        return sorted(rows, key=lambda row: (row.theme, row.family))

    # -- current theme --

    def current_theme(self) -> ThemeRef:
        with self._lock.read():
            return self._current or self._default_theme

    def set_current_theme(self, family: str, theme: str) -> ThemeRef:
        with self._lock.write():
            self._require(family, theme)
            self._current = ThemeRef(family, theme)
            current = self._current
        logger.info("current theme set to %s / %s", family, theme)
        return current

    # -- resolution --

    def resolve(self, family: str, theme: str) -> UIColors:
        """Resolved colors for one theme, served from the cache when possible."""
        with self._lock.read():
            owner, target = self._require(family, theme)
            ref = ThemeRef(family, theme)
            colors = self._cache.get(ref)
            if colors is None:
                colors = resolve(owner, target)
                self._cache.put(ref, colors)
            return colors

    def resolve_current(self) -> UIColors:
        ref = self.current_theme()
        return self.resolve(ref.family, ref.theme)

    # -- loading --

    def load_documents(self, paths: Iterable[Path]) -> list[tuple[Path, ThemeFamily]]:
        """Load user theme documents; each failing file is skipped and reported."""
        loaded: list[tuple[Path, ThemeFamily]] = []
        for path in paths:
            try:
                family = load_theme_family(path)
                self.add_family(family)
            except ThemeError as exc:
                message = f"{path}: {exc.message}" if exc.path is None else str(exc)
                with self._lock.write():
                    self._load_errors.append(message)
                logger.warning("skipping theme file %s: %s", path, exc.message)
                continue
            loaded.append((path, family))
        return loaded

    def load_errors(self) -> list[str]:
        with self._lock.read():
            return list(self._load_errors)

    # -- internals, called with the lock held --

    def _unique_name(self, base: str) -> str:
        candidate = f"{base} ({USER_FAMILY_SUFFIX})"
        counter = 2
        while candidate in self._families:
            candidate = f"{base} ({USER_FAMILY_SUFFIX} {counter})"
            counter += 1
        return candidate

    def _require(self, family: str, theme: str) -> tuple[ThemeFamily, Theme]:
        owner = self._families.get(family)
        target = owner.get_theme(theme) if owner is not None else None
        if owner is None or target is None:
            raise NameCollisionError(
                ErrorCode.THEME_NOT_FOUND,
                f"Theme {theme!r} not found in family {family!r}",
                family=family,
                theme=theme,
            )
        return owner, target

    def _drop_current_if_missing(self) -> None:
        if self._current is None:
            return
        owner = self._families.get(self._current.family)
        if owner is None or owner.get_theme(self._current.theme) is None:
            logger.info("current theme %s / %s is gone; reverting to default", *self._current)
            self._current = None

    @staticmethod
    def _summary(family: ThemeFamily, theme: Theme) -> ThemeSummary:
        return ThemeSummary(
            family=family.name,
            theme=theme.name,
            appearance=theme.appearance,
            author=family.author,
            provenance=family.provenance,
        )

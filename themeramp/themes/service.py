"""Runtime theme selection, editing and persistence service."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from themeramp.errors import ThemeError
from themeramp.themes.constants import THEME_FILE_SUFFIXES
from themeramp.themes.convert import apply_edit
from themeramp.themes.models import Theme, ThemeFamily, ThemeRef, ThemeSummary
from themeramp.themes.registry import ThemeRegistry
from themeramp.themes.resolver import UIColors
from themeramp.themes.schema import ColorReference
from themeramp.themes.serializer import save_theme_family, theme_file_name

logger = logging.getLogger(__name__)


class ThemeService(QObject):
    """Load user themes, track the current theme and persist edits."""

    current_theme_changed = Signal(str, str)  # family, theme
    theme_edited = Signal(str, str)  # family, theme
    themes_reloaded = Signal()

    def __init__(self, settings, registry: ThemeRegistry | None = None) -> None:
        super().__init__()
        self._settings = settings
        self._registry = registry if registry is not None else ThemeRegistry()
        self._paths: dict[str, Path] = {}

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    @property
    def user_themes_dir(self) -> Path:
        return Path(self._settings.themes_dir)

    def reload_themes(self) -> list[str]:
        """Reload user families from the themes directory; returns load errors."""
        self._registry.unload_user_families()
        self._paths = {}
        root = self.user_themes_dir
        paths: list[Path] = []
        if root.exists():
            paths = sorted(
                path
                for path in root.iterdir()
                if path.is_file() and path.suffix.lower() in THEME_FILE_SUFFIXES
            )
        for path, family in self._registry.load_documents(paths):
            self._paths[family.name] = path
        errors = self._registry.load_errors()
        if errors:
            logger.warning("theme load warnings: %s", " | ".join(errors[:6]))
        self.themes_reloaded.emit()
        return errors

    def available_themes(self) -> list[ThemeSummary]:
        return self._registry.list_themes()

    def current_theme(self) -> ThemeRef:
        return self._registry.current_theme()

    def set_current_theme(self, family: str, theme: str, *, persist: bool = True) -> tuple[bool, str]:
        try:
            ref = self._registry.set_current_theme(family, theme)
        except ThemeError as exc:
            return False, exc.message
        if persist:
            self._settings.current_family = ref.family
            self._settings.current_theme = ref.theme
        self.current_theme_changed.emit(ref.family, ref.theme)
        return True, f"Applied theme: {ref.theme}"

    def apply_startup_theme(self) -> tuple[bool, str]:
        """Restore the saved theme, falling back to the built-in default."""
        family = self._settings.current_family
        theme = self._settings.current_theme
        if family and theme:
            ok, message = self.set_current_theme(family, theme, persist=False)
            if ok:
                return True, message
            logger.warning("saved theme %s / %s is unavailable: %s", family, theme, message)
        default = self._registry.current_theme()
        self.set_current_theme(default.family, default.theme, persist=True)
        return False, f"Using default theme: {default.theme}"

    def resolved_colors(self, family: str | None = None, theme: str | None = None) -> UIColors:
        if family is None or theme is None:
            return self._registry.resolve_current()
        return self._registry.resolve(family, theme)

    def edit_color(
        self,
        identifier: str,
        reference: ColorReference,
        *,
        family: str | None = None,
        theme: str | None = None,
    ) -> Theme:
        """Change one UI color of a theme (the current one by default) and save it.

        The edited theme becomes the current theme.
        """
        if family is None or theme is None:
            family, theme = self._registry.current_theme()
        edited = apply_edit(
            self._registry,
            family,
            theme,
            identifier,
            reference,
            author=self._settings.user_author or None,
            mode=self._settings.edit_mode,
            persist=self._save,
        )
        self.theme_edited.emit(edited.family, edited.name)
        self.set_current_theme(edited.family, edited.name)
        return edited

    def theme_path(self, family_name: str) -> Path:
        path = self._paths.get(family_name)
        if path is not None:
            return path
        root = self.user_themes_dir
        path = root / theme_file_name(family_name)
        counter = 2
        while path.exists():
            path = root / theme_file_name(f"{family_name} {counter}")
            counter += 1
        return path

    def _save(self, family: ThemeFamily) -> None:
        path = save_theme_family(family, self.theme_path(family.name))
        self._paths[family.name] = path
        logger.info("saved theme family %r to %s", family.name, path)

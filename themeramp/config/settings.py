"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themeramp.themes.models import EditMode


class AppSettings:
    """Wraps QSettings for persistent theme configuration.

    Pass ``ini_path`` to keep settings in a standalone ini file instead of
    the platform's native store.
    """

    def __init__(self, ini_path: Path | None = None) -> None:
        if ini_path is None:
            self._qs = QSettings("ThemeRamp", "ThemeRamp")
        else:
            self._qs = QSettings(str(ini_path), QSettings.Format.IniFormat)

    # -- current theme --

    @property
    def current_family(self) -> str:
        raw = self._qs.value("ui/theme_family", "", type=str)
        return (raw or "").strip()

    @current_family.setter
    def current_family(self, value: str) -> None:
        self._qs.setValue("ui/theme_family", (value or "").strip())

    @property
    def current_theme(self) -> str:
        raw = self._qs.value("ui/theme_name", "", type=str)
        return (raw or "").strip()

    @current_theme.setter
    def current_theme(self, value: str) -> None:
        self._qs.setValue("ui/theme_name", (value or "").strip())

    # -- editing --

    @property
    def edit_mode(self) -> EditMode:
        raw = self._qs.value("themes/edit_mode", EditMode.DELTA.value, type=str)
        mode = (raw or "").strip().lower()
        if mode in {item.value for item in EditMode}:
            return EditMode(mode)
        return EditMode.DELTA

    @edit_mode.setter
    def edit_mode(self, value: EditMode | str) -> None:
        mode = str(getattr(value, "value", value) or "").strip().lower()
        if mode not in {item.value for item in EditMode}:
            mode = EditMode.DELTA.value
        self._qs.setValue("themes/edit_mode", mode)

    @property
    def user_author(self) -> str:
        return self._qs.value("themes/author", "", type=str)

    @user_author.setter
    def user_author(self, value: str) -> None:
        self._qs.setValue("themes/author", (value or "").strip())

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def themes_dir(self) -> Path:
        raw = (self._qs.value("themes/dir", "", type=str) or "").strip()
        path = Path(raw) if raw else self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @themes_dir.setter
    def themes_dir(self, value: Path | str) -> None:
        self._qs.setValue("themes/dir", str(value))

    def sync(self) -> None:
        self._qs.sync()

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themeramp"

"""Tests for themeramp.themes.service."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from themeramp.errors import PersistenceError, SchemaViolationError
from themeramp.themes.loader import load_theme_family
from themeramp.themes.models import EditMode, ThemeRef
from themeramp.themes.schema import ScaleRef
from themeramp.themes.service import ThemeService


@pytest.fixture
def mock_settings(tmp_path):
    settings = MagicMock()
    settings.themes_dir = tmp_path / "themes"
    settings.themes_dir.mkdir()
    settings.current_family = ""
    settings.current_theme = ""
    settings.user_author = ""
    settings.edit_mode = EditMode.DELTA
    return settings


def _write_family(path: Path, name: str, theme: str = "Night", appearance: str = "dark") -> None:
    path.write_text(
        json.dumps({"name": name, "author": "tests", "themes": [{"name": theme, "appearance": appearance}]}),
        encoding="utf-8",
    )


class TestReload:
    def test_reload_loads_user_families(self, mock_settings):
        _write_family(mock_settings.themes_dir / "night.json", "Night Owl")
        service = ThemeService(mock_settings)

        errors = service.reload_themes()

        assert errors == []
        refs = [row.ref for row in service.available_themes()]
        assert ThemeRef("Night Owl", "Night") in refs

    def test_reload_reports_broken_files(self, mock_settings):
        _write_family(mock_settings.themes_dir / "ok.json", "Fine")
        (mock_settings.themes_dir / "broken.json").write_text("{", encoding="utf-8")
        (mock_settings.themes_dir / "notes.txt").write_text("ignored", encoding="utf-8")
        service = ThemeService(mock_settings)

        errors = service.reload_themes()

        assert len(errors) == 1
        assert "broken.json" in errors[0]
        assert service.registry.get_family("Fine") is not None

    def test_reload_drops_deleted_files(self, mock_settings):
        path = mock_settings.themes_dir / "night.json"
        _write_family(path, "Night Owl")
        service = ThemeService(mock_settings)
        service.reload_themes()

        path.unlink()
        service.reload_themes()

        assert service.registry.get_family("Night Owl") is None

    def test_reload_emits_signal(self, mock_settings):
        service = ThemeService(mock_settings)
        calls = []
        service.themes_reloaded.connect(lambda: calls.append(True))

        service.reload_themes()

        assert calls == [True]


class TestCurrentTheme:
    def test_startup_falls_back_to_default(self, mock_settings):
        mock_settings.current_family = "Gone"
        mock_settings.current_theme = "Missing"
        service = ThemeService(mock_settings)

        ok, _ = service.apply_startup_theme()

        assert ok is False
        assert service.current_theme() == ThemeRef("Default", "Default Light")
        assert mock_settings.current_family == "Default"
        assert mock_settings.current_theme == "Default Light"

    def test_startup_restores_saved_theme(self, mock_settings):
        mock_settings.current_family = "Ember"
        mock_settings.current_theme = "Ember Dark"
        service = ThemeService(mock_settings)

        ok, _ = service.apply_startup_theme()

        assert ok is True
        assert service.current_theme() == ThemeRef("Ember", "Ember Dark")

    def test_set_current_theme_persists_and_signals(self, mock_settings):
        service = ThemeService(mock_settings)
        changes = []
        service.current_theme_changed.connect(lambda family, theme: changes.append((family, theme)))

        ok, message = service.set_current_theme("Ember", "Ember Light")

        assert ok is True
        assert "Ember Light" in message
        assert mock_settings.current_family == "Ember"
        assert changes == [("Ember", "Ember Light")]

    def test_set_unknown_theme_returns_error(self, mock_settings):
        service = ThemeService(mock_settings)

        ok, message = service.set_current_theme("Ember", "Nope")

        assert ok is False
        assert "Nope" in message
        assert service.current_theme() == ThemeRef("Default", "Default Light")

    def test_resolved_colors_defaults_to_current(self, mock_settings):
        service = ThemeService(mock_settings)
        service.set_current_theme("Default", "Default Dark")

        assert service.resolved_colors() == service.resolved_colors("Default", "Default Dark")


class TestEditColor:
    def test_edit_system_theme_saves_user_copy(self, mock_settings):
        service = ThemeService(mock_settings)
        edited = []
        service.theme_edited.connect(lambda family, theme: edited.append((family, theme)))

        theme = service.edit_color("accent-background", ScaleRef("green", 8))

        path = mock_settings.themes_dir / "default-custom.json"
        assert path.exists()
        assert load_theme_family(path).get_theme("Default Light") == theme
        assert edited == [("Default (Custom)", "Default Light")]
        assert service.current_theme() == ThemeRef("Default (Custom)", "Default Light")

    def test_edit_user_theme_rewrites_same_file(self, mock_settings):
        service = ThemeService(mock_settings)
        service.edit_color("text", ScaleRef("gray", 10))
        service.edit_color("border", ScaleRef("gray", 6))

        files = sorted(path.name for path in mock_settings.themes_dir.iterdir())
        assert files == ["default-custom.json"]
        family = load_theme_family(mock_settings.themes_dir / "default-custom.json")
        assert set(family.get_theme("Default Light").overrides) == {"text", "border"}

    def test_edited_theme_survives_reload(self, mock_settings):
        service = ThemeService(mock_settings)
        service.edit_color("text", ScaleRef("red", 11), family="Ember", theme="Ember Dark")
        before = service.resolved_colors("Ember (Custom)", "Ember Dark")

        service.reload_themes()

        assert service.resolved_colors("Ember (Custom)", "Ember Dark") == before
        assert service.registry.get_family("Ember (Custom)").scales is not None

    def test_edit_uses_configured_author(self, mock_settings):
        mock_settings.user_author = "Sam"
        service = ThemeService(mock_settings)

        theme = service.edit_color("text", ScaleRef("gray", 10))

        assert service.registry.get_family(theme.family).author == "Sam"

    def test_edit_unknown_color_changes_nothing(self, mock_settings):
        service = ThemeService(mock_settings)

        with pytest.raises(SchemaViolationError):
            service.edit_color("sparkle", ScaleRef("gray", 10))

        assert list(mock_settings.themes_dir.iterdir()) == []
        assert service.current_theme() == ThemeRef("Default", "Default Light")

    def test_failed_save_rolls_back(self, mock_settings, monkeypatch):
        service = ThemeService(mock_settings)

        def _fail(family, path):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr("themeramp.themes.service.save_theme_family", _fail)

        with pytest.raises(PersistenceError):
            service.edit_color("text", ScaleRef("gray", 10))

        assert service.registry.get_family("Default (Custom)") is None
        assert service.current_theme() == ThemeRef("Default", "Default Light")

    def test_theme_path_avoids_existing_files(self, mock_settings):
        (mock_settings.themes_dir / "default-custom.json").write_text("{}", encoding="utf-8")
        service = ThemeService(mock_settings)

        assert service.theme_path("Default (Custom)").name == "default-custom-2.json"

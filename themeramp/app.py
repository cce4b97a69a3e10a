"""Theme service bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from themeramp.config.settings import AppSettings
from themeramp.themes.registry import ThemeRegistry
from themeramp.themes.service import ThemeService


def _configure_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("themeramp")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themeramp.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def create_theme_service(settings: AppSettings | None = None) -> ThemeService:
    """Build the registry and service, load user themes and restore the current theme."""
    settings = settings or AppSettings()
    logger = _configure_logger(settings)
    logger.info("starting theme service themes_dir=%s", settings.themes_dir)

    service = ThemeService(settings, ThemeRegistry())
    service.reload_themes()
    ok, message = service.apply_startup_theme()
    if not ok:
        logger.info(message)
    return service

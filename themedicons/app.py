"""Icon provider bootstrap."""

from __future__ import annotations

import logging
from functools import partial
from logging.handlers import RotatingFileHandler

from themedicons.config.settings import AppSettings
from themedicons.core.bundles import BundleProvider
from themedicons.core.resolver import ResourceResolver
from themedicons.icon_provider import ThemedIconProvider
from themedicons.runtime_paths import is_frozen, package_root
from themedicons.themes import is_themed_icon_enabled

LOGGER_NAME = "themedicons"


def configure_logging(settings: AppSettings) -> logging.Logger:
    """Attach a rotating file handler to the package logger, once."""
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themedicons.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger


def create_icon_provider(settings: AppSettings | None = None) -> ThemedIconProvider:
    """Wire settings, bundles and the themed icon cache into a provider."""
    settings = settings if settings is not None else AppSettings()
    configure_logging(settings)
    startup = logging.getLogger(f"{LOGGER_NAME}.startup")
    startup.info("startup mode frozen=%s package_root=%s", is_frozen(), package_root())

    host_dir = settings.host_bundle_dir
    if not host_dir.exists():
        startup.warning("host bundle missing at %s", host_dir)

    bundles = BundleProvider(host_dir, settings.icon_packs_dir)
    icon_pack = settings.icon_pack or None
    provider = ThemedIconProvider(
        ResourceResolver(bundles),
        partial(is_themed_icon_enabled, settings),
        icon_pack=icon_pack,
    )
    errors = bundles.load_errors()
    if errors:
        startup.warning("icon pack load warnings: %s", " | ".join(errors[:6]))
    return provider

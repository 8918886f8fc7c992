"""Device capability checks for themed icons."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themedicons.config.settings import AppSettings

DISABLE_ENV_VAR = "THEMEDICONS_DISABLE_THEMED_ICONS"
_TRUTHY = {"1", "true", "yes", "on"}


def is_themed_icon_enabled(settings: AppSettings) -> bool:
    """Return True when themed icons are switched on for this device."""
    if os.environ.get(DISABLE_ENV_VAR, "").strip().lower() in _TRUTHY:
        return False
    return settings.themed_icons_enabled

"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themedicons.runtime_paths import host_bundle_root


class AppSettings:
    """Wraps QSettings for persistent themed icon configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemedIcons", "ThemedIcons")

    # -- themed icons --

    @property
    def themed_icons_enabled(self) -> bool:
        return self._qs.value("icons/themed_icons_enabled", True, type=bool)

    @themed_icons_enabled.setter
    def themed_icons_enabled(self, value: bool) -> None:
        self._qs.setValue("icons/themed_icons_enabled", bool(value))

    @property
    def icon_pack(self) -> str:
        raw = self._qs.value("icons/icon_pack", "", type=str)
        return (raw or "").strip()

    @icon_pack.setter
    def icon_pack(self, value: str) -> None:
        self._qs.setValue("icons/icon_pack", (value or "").strip())

    # -- bundle locations --

    @property
    def host_bundle_dir(self) -> Path:
        raw = self._qs.value("dirs/host_bundle", "", type=str)
        value = (raw or "").strip()
        return Path(value) if value else host_bundle_root()

    @host_bundle_dir.setter
    def host_bundle_dir(self, value: str | Path) -> None:
        self._qs.setValue("dirs/host_bundle", str(value) if value else "")

    @property
    def icon_packs_dir(self) -> Path:
        raw = self._qs.value("dirs/icon_packs", "", type=str)
        value = (raw or "").strip()
        if value:
            return Path(value)
        path = self.app_data_dir / "icon_packs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @icon_packs_dir.setter
    def icon_packs_dir(self, value: str | Path) -> None:
        self._qs.setValue("dirs/icon_packs", str(value) if value else "")

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sync(self) -> None:
        self._qs.sync()

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themedicons"

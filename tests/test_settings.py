"""Tests for themedicons.config.settings and the capability check."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from themedicons.config.settings import AppSettings
from themedicons.runtime_paths import host_bundle_root
from themedicons.themes import DISABLE_ENV_VAR, is_themed_icon_enabled


@pytest.fixture
def settings(tmp_path, monkeypatch) -> AppSettings:
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.delenv(DISABLE_ENV_VAR, raising=False)
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qs)


def test_defaults(settings: AppSettings, tmp_path: Path) -> None:
    assert settings.themed_icons_enabled is True
    assert settings.icon_pack == ""
    assert settings.host_bundle_dir == host_bundle_root()
    assert settings.app_data_dir == tmp_path / "appdata" / "themedicons"
    assert settings.icon_packs_dir == tmp_path / "appdata" / "themedicons" / "icon_packs"
    assert settings.icon_packs_dir.is_dir()


def test_round_trip_values(settings: AppSettings, tmp_path: Path) -> None:
    settings.themed_icons_enabled = False
    settings.icon_pack = "  com.example.iconpack  "
    settings.host_bundle_dir = tmp_path / "host"
    settings.icon_packs_dir = tmp_path / "packs"
    settings.sync()

    reopened = AppSettings(QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat))
    assert reopened.themed_icons_enabled is False
    assert reopened.icon_pack == "com.example.iconpack"
    assert reopened.host_bundle_dir == tmp_path / "host"
    assert reopened.icon_packs_dir == tmp_path / "packs"


def test_clearing_dirs_restores_defaults(settings: AppSettings, tmp_path: Path) -> None:
    settings.host_bundle_dir = tmp_path / "host"
    settings.host_bundle_dir = ""
    assert settings.host_bundle_dir == host_bundle_root()


class TestCapabilityCheck:
    def test_follows_setting(self, settings):
        assert is_themed_icon_enabled(settings) is True
        settings.themed_icons_enabled = False
        assert is_themed_icon_enabled(settings) is False

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_environment_override_disables(self, settings, monkeypatch, value):
        monkeypatch.setenv(DISABLE_ENV_VAR, value)
        assert is_themed_icon_enabled(settings) is False

    def test_falsy_environment_value_is_ignored(self, settings, monkeypatch):
        monkeypatch.setenv(DISABLE_ENV_VAR, "0")
        assert is_themed_icon_enabled(settings) is True

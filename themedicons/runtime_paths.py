"""Locate packaged resources in source checkouts and PyInstaller builds."""

from __future__ import annotations

from pathlib import Path
import sys

HOST_BUNDLE_DIR = "host"


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))


def package_root() -> Path:
    """Directory holding the ``themedicons`` package data.

    Frozen builds unpack into ``sys._MEIPASS``; the package data sits either in
    a ``themedicons`` folder there or directly at the extraction root.
    """
    source_root = Path(__file__).resolve().parent
    meipass = getattr(sys, "_MEIPASS", None) if is_frozen() else None
    if not meipass:
        return source_root
    extracted = Path(meipass)
    nested = extracted / source_root.name
    return nested if nested.exists() else extracted


def host_bundle_root() -> Path:
    return package_root() / HOST_BUNDLE_DIR

"""Shared fixtures for building resource bundles on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from themedicons.core.bundles import BundleProvider
from themedicons.core.resolver import ResourceResolver

HOST_PACKAGE = "com.example.launcher"
PACK_PACKAGE = "com.example.iconpack"


def icon_map_xml(*entries: tuple[str | None, str | None], extra: str = "") -> str:
    """Render an icon map document; ``None`` leaves an attribute out."""
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<icons>"]
    for package, drawable in entries:
        attrs = ""
        if package is not None:
            attrs += f' package="{package}"'
        if drawable is not None:
            attrs += f' drawable="{drawable}"'
        lines.append(f"    <icon{attrs} />")
    if extra:
        lines.append(extra)
    lines.append("</icons>")
    return "\n".join(lines)


def write_bundle(
    root: Path,
    package: str,
    *,
    icon_map: str | None = None,
    drawables: tuple[str, ...] = (),
) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "bundle.yaml").write_text(f"package: {package}\n", encoding="utf-8")
    drawable_dir = root / "res" / "drawable"
    drawable_dir.mkdir(parents=True, exist_ok=True)
    for name in drawables:
        (drawable_dir / f"{name}.xml").write_text("<vector />", encoding="utf-8")
    if icon_map is not None:
        xml_dir = root / "res" / "xml"
        xml_dir.mkdir(parents=True, exist_ok=True)
        (xml_dir / "grayscale_icon_map.xml").write_text(icon_map, encoding="utf-8")
    return root


@pytest.fixture
def host_dir(tmp_path: Path) -> Path:
    return tmp_path / "host"


@pytest.fixture
def packs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "packs"
    path.mkdir()
    return path


@pytest.fixture
def make_resolver(host_dir: Path, packs_dir: Path):
    """Factory fixture: write the host bundle, return a resolver over it."""

    def _make(icon_map: str | None = None, drawables: tuple[str, ...] = ()) -> ResourceResolver:
        write_bundle(host_dir, HOST_PACKAGE, icon_map=icon_map, drawables=drawables)
        return ResourceResolver(BundleProvider(host_dir, packs_dir))

    return _make

"""Directory-backed resource bundles and the provider that locates them."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

import yaml

from themedicons.errors import BundleError, PackNotFoundError, ResourceNotFoundError

MANIFEST_NAME = "bundle.yaml"
RESOURCES_DIR = "res"
APP_PACKAGE_ID = 0x7F

_PACKAGE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(?:\.[A-Za-z][A-Za-z0-9_]*)*$")
_REFERENCE_RE = re.compile(r"^@(?:(?P<package>[^:/]+):)?(?P<type>[a-z][a-z0-9_-]*)/(?P<name>[^/]+)$")
_MAX_MANIFEST_BYTES = 16 * 1024
_MAX_PACK_DIR_CANDIDATES = 512


def make_resource_id(type_index: int, entry_index: int) -> int:
    return (APP_PACKAGE_ID << 24) | (type_index << 16) | entry_index


class ResourceBundle:
    """A resource container laid out as ``bundle.yaml`` plus ``res/<type>/<name>.*``.

    Identifiers are assigned the way a compiled resource table would: resource
    types are numbered from 1 in sorted order, entries from 0 in sorted order
    within their type. Identifier 0 never names a resource.
    """

    def __init__(self, root: Path, package: str, label: str = "") -> None:
        self._root = root
        self._package = package
        self._label = label or package
        self._ids: dict[tuple[str, str], int] = {}
        self._paths: dict[int, Path] = {}
        self._index_resources()

    @classmethod
    def load(cls, root: Path) -> ResourceBundle:
        """Load a bundle directory, validating its manifest."""
        if not root.is_dir():
            raise BundleError(f"Bundle path is not a directory: {root}", path=str(root))
        manifest = _load_manifest(root / MANIFEST_NAME)
        try:
            return cls(root, manifest["package"], manifest.get("label", ""))
        except OSError as exc:
            raise BundleError(f"Unable to index resources in {root}: {exc}", path=str(root)) from exc

    @property
    def root(self) -> Path:
        return self._root

    @property
    def package(self) -> str:
        return self._package

    @property
    def label(self) -> str:
        return self._label

    def get_identifier(self, name: str, res_type: str, package: str) -> int:
        """Return the id of ``res_type/name`` in ``package``, or 0 when absent."""
        if package != self._package:
            return 0
        return self._ids.get((res_type, name), 0)

    def resolve_reference(self, value: str | None) -> int:
        """Resolve an ``@type/name`` or ``@package:type/name`` reference to an id."""
        if not value:
            return 0
        match = _REFERENCE_RE.match(value.strip())
        if match is None:
            return 0
        return self.get_identifier(
            match.group("name"),
            match.group("type"),
            match.group("package") or self._package,
        )

    def resource_path(self, res_id: int) -> Path:
        try:
            return self._paths[res_id]
        except KeyError:
            raise ResourceNotFoundError(res_id, self._package) from None

    def open_xml(self, res_id: int) -> bytes:
        """Read the raw bytes of an ``xml`` resource."""
        path = self.resource_path(res_id)
        if path.parent.name != "xml":
            raise ResourceNotFoundError(res_id, self._package)
        return path.read_bytes()

    def _index_resources(self) -> None:
        res_dir = self._root / RESOURCES_DIR
        if not res_dir.is_dir():
            return
        type_dirs = sorted(path for path in res_dir.iterdir() if path.is_dir())
        for type_index, type_dir in enumerate(type_dirs, start=1):
            files = sorted(
                (path for path in type_dir.iterdir() if path.is_file()),
                key=lambda path: (path.stem, path.name),
            )
            entry_index = 0
            for path in files:
                key = (type_dir.name, path.stem)
                if key in self._ids:
                    # Same name with a different extension; first one wins.
                    continue
                res_id = make_resource_id(type_index, entry_index)
                self._ids[key] = res_id
                self._paths[res_id] = path
                entry_index += 1

    def __repr__(self) -> str:
        return f"ResourceBundle(package={self._package!r}, root={str(self._root)!r})"


class BundleProvider:
    """Hands out the host's own bundle and looks up icon pack bundles by package."""

    def __init__(self, own_root: Path, packs_root: Path | None = None) -> None:
        self._own_root = own_root
        self._packs_root = packs_root
        self._load_errors: list[str] = []

    @property
    def own_root(self) -> Path:
        return self._own_root

    @property
    def packs_root(self) -> Path | None:
        return self._packs_root

    def get_own_bundle(self) -> ResourceBundle:
        """Load the host bundle; every call re-reads the resource index."""
        return ResourceBundle.load(self._own_root)

    def get_bundle_for(self, pack_identifier: str) -> ResourceBundle:
        """Return the installed bundle whose manifest package matches.

        Raises:
            PackNotFoundError: no readable bundle under the packs root declares
                ``pack_identifier``.
        """
        self._load_errors = []
        root = self._packs_root
        if root is None or not root.exists():
            raise PackNotFoundError(pack_identifier)
        try:
            candidates = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            self._load_errors.append(f"Failed to list icon packs in {root}: {exc}")
            raise PackNotFoundError(pack_identifier) from exc

        if len(candidates) > _MAX_PACK_DIR_CANDIDATES:
            self._load_errors.append(
                f"Icon pack directory limit exceeded in {root}; "
                f"only first {_MAX_PACK_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_PACK_DIR_CANDIDATES]

        for pack_dir in candidates:
            try:
                bundle = ResourceBundle.load(pack_dir)
            except BundleError as exc:
                self._load_errors.append(str(exc))
                continue
            if bundle.package == pack_identifier:
                return bundle
        raise PackNotFoundError(pack_identifier)

    def load_errors(self) -> list[str]:
        return list(self._load_errors)


def _load_manifest(path: Path) -> Mapping[str, str]:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise BundleError(f"Unable to stat {path}: {exc}", path=str(path)) from exc
    if size > _MAX_MANIFEST_BYTES:
        raise BundleError(f"{path}: file exceeds max size ({_MAX_MANIFEST_BYTES} bytes)")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise BundleError(f"Unable to read {path}: {exc}", path=str(path)) from exc
    except yaml.YAMLError as exc:
        raise BundleError(f"Invalid YAML in {path}: {exc}", path=str(path)) from exc
    if not isinstance(data, dict):
        raise BundleError(f"Expected YAML mapping in {path}", path=str(path))

    unknown = sorted(str(key) for key in data.keys() if key not in {"package", "label"})
    if unknown:
        raise BundleError(f"{path}: unsupported keys found: {', '.join(unknown)}")

    package = data.get("package")
    if not isinstance(package, str) or not _PACKAGE_RE.match(package.strip()):
        raise BundleError(f"{path}: field 'package' must be a dotted package name")
    manifest = {"package": package.strip()}

    label = data.get("label")
    if label is not None:
        if not isinstance(label, str) or any(ch in label for ch in ("\n", "\r", "\t")):
            raise BundleError(f"{path}: field 'label' must be a single line string")
        manifest["label"] = label.strip()
    return manifest

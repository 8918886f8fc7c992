"""Icon providers that substitute themed icons for package icons."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QSysInfo

from themedicons import __version__
from themedicons.core.document import find_document
from themedicons.core.icon_map import DocumentLocator, ThemeData, ThemedIconMapCache
from themedicons.core.resolver import ResourceResolver


class IconProvider:
    """Base provider: no themed icons, versioned icon state."""

    def get_theme_data_for_package(
        self,
        package: str,
        themed_icon_pack: str | None = None,
    ) -> ThemeData | None:
        return None

    def get_system_icon_state(self) -> str:
        """Return a tag that changes whenever rendered icons must be regenerated."""
        return f"icon-provider-v{__version__}"


class ThemedIconProvider(IconProvider):
    """Icon provider backed by a themed icon map from the host or an icon pack.

    The capability check is consulted once, at construction, to seed
    ``set_icon_theme_supported``.
    """

    def __init__(
        self,
        resolver: ResourceResolver,
        capability: Callable[[], bool],
        *,
        icon_pack: str | None = None,
        build_revision: str | None = None,
        locator: DocumentLocator = find_document,
    ) -> None:
        self._cache = ThemedIconMapCache(resolver, icon_pack=icon_pack, locator=locator)
        self._build_revision = build_revision if build_revision is not None else QSysInfo.kernelVersion()
        self.set_icon_theme_supported(capability())

    @property
    def cache(self) -> ThemedIconMapCache:
        return self._cache

    @property
    def supports_icon_theme(self) -> bool:
        return self._cache.supported

    def set_icon_theme_supported(self, is_supported: bool) -> None:
        """Enable or disable icon theme support; always rebuilds the map."""
        self._cache.set_supported(is_supported)

    def get_theme_data_for_package(
        self,
        package: str,
        themed_icon_pack: str | None = None,
    ) -> ThemeData | None:
        return self._cache.lookup(package, themed_icon_pack)

    def get_system_icon_state(self) -> str:
        return super().get_system_icon_state() + self.fingerprint_suffix()

    def fingerprint_suffix(self) -> str:
        theme_tag = ",with-theme" if self._cache.supported else ",no-theme"
        return f"{theme_tag},{self._build_revision}"

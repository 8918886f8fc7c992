"""Lazily built, toggle-invalidated map of themed icons per package."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from themedicons.core.bundles import ResourceBundle
from themedicons.core.document import (
    DocumentHandle,
    ElementEvent,
    EventKind,
    find_document,
    iter_elements,
)
from themedicons.core.resolver import ResourceResolver
from themedicons.errors import ErrorCode, ThemedIconError, classify_exception

logger = logging.getLogger("themedicons.icons")

ICON_MAP_NAME = "grayscale_icon_map"
TAG_ICON = "icon"
ATTR_PACKAGE = "package"
ATTR_DRAWABLE = "drawable"

DocumentLocator = Callable[[ResourceBundle, str, str], DocumentHandle | None]


@dataclass(frozen=True, slots=True, eq=False)
class ThemeData:
    """A themed icon: the bundle it lives in and its resource id there."""

    bundle: ResourceBundle
    resource_id: int

    def resource_path(self) -> Path:
        return self.bundle.resource_path(self.resource_id)


ThemeIconMap = dict[str, ThemeData]


@dataclass(frozen=True, slots=True)
class Unbuilt:
    pass


@dataclass(frozen=True, slots=True)
class Built:
    icon_map: ThemeIconMap = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Disabled:
    error: ThemedIconError | None = None


CacheState = Unbuilt | Built | Disabled


def build_themed_icon_map(
    resolver: ResourceResolver,
    external_pack: str | None,
    locator: DocumentLocator = find_document,
) -> ThemeIconMap | ThemedIconError:
    """Read the icon map from the resolved bundle.

    A bundle without the document yields an empty map. Any failure while
    resolving or parsing is returned as a ``ThemedIconError`` and no partial
    map survives.
    """
    try:
        resolved = resolver.resolve(external_pack)
        handle = locator(resolved.bundle, ICON_MAP_NAME, resolved.namespace)
        if handle is None:
            if resolved.used_external_pack:
                missing = ThemedIconError(
                    ErrorCode.DOCUMENT_MISSING,
                    message=f"Icon map does not exist in {external_pack}",
                    pack=external_pack,
                )
                logger.error("%s", missing.message, extra={"error_code": missing.code.name})
            return {}
        return _parse_icon_map(resolved.bundle, iter_elements(handle, (ATTR_PACKAGE, ATTR_DRAWABLE)))
    except Exception as exc:
        logger.error("Unable to parse icon map", exc_info=exc)
        return classify_exception(exc, pack=external_pack)


def _parse_icon_map(bundle: ResourceBundle, events: Iterator[ElementEvent]) -> ThemeIconMap:
    icon_map: ThemeIconMap = {}
    root = next((event for event in events if event.kind is EventKind.START), None)
    if root is None:
        return icon_map

    for event in events:
        if event.kind is EventKind.END and event.depth == root.depth:
            break
        if event.kind is not EventKind.START or event.depth != root.depth + 1:
            continue
        if event.name != TAG_ICON:
            continue
        package = event.attribute(ATTR_PACKAGE)
        icon_id = bundle.resolve_reference(event.attribute(ATTR_DRAWABLE))
        if icon_id != 0 and package:
            # Later entries for the same package replace earlier ones.
            icon_map[package] = ThemeData(bundle, icon_id)
    return icon_map


class ThemedIconMapCache:
    """Owns the themed icon map and rebuilds it whenever support is toggled.

    ``lookup`` builds the map on first use and only reads afterwards. The map is
    built for whichever pack the build was asked for; later lookups naming a
    different pack are served from the same map until the next toggle.
    """

    def __init__(
        self,
        resolver: ResourceResolver,
        *,
        icon_pack: str | None = None,
        locator: DocumentLocator = find_document,
    ) -> None:
        self._resolver = resolver
        self._icon_pack = icon_pack or None
        self._locator = locator
        self._supported = False
        self._state: CacheState = Unbuilt()

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def icon_pack(self) -> str | None:
        return self._icon_pack

    @property
    def state(self) -> CacheState:
        return self._state

    def set_supported(self, enabled: bool) -> None:
        """Store the flag and rebuild the map now, even if the flag is unchanged."""
        self._supported = enabled
        self._state = Unbuilt()
        self._ensure_built(self._icon_pack)

    def lookup(self, package: str, external_pack: str | None = None) -> ThemeData | None:
        state = self._ensure_built(external_pack)
        if isinstance(state, Built):
            return state.icon_map.get(package)
        return None

    def _ensure_built(self, external_pack: str | None) -> CacheState:
        if isinstance(self._state, Unbuilt):
            result = build_themed_icon_map(self._resolver, external_pack, self._locator)
            if isinstance(result, ThemedIconError):
                self._state = Disabled(result)
            else:
                self._state = Built(result)
        return self._state

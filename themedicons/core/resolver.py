"""Choose the resource bundle a themed icon map is read from."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from themedicons.core.bundles import BundleProvider, ResourceBundle
from themedicons.errors import PackNotFoundError

logger = logging.getLogger("themedicons.icons")


@dataclass(frozen=True, slots=True)
class ResolvedBundle:
    """The bundle to read from and whether it came from an external icon pack."""

    bundle: ResourceBundle
    used_external_pack: bool

    @property
    def namespace(self) -> str:
        return self.bundle.package


class ResourceResolver:
    """Falls back to the host's own bundle when an icon pack cannot be found."""

    def __init__(self, provider: BundleProvider) -> None:
        self._provider = provider

    def resolve(self, pack_identifier: str | None) -> ResolvedBundle:
        if pack_identifier is not None:
            try:
                bundle = self._provider.get_bundle_for(pack_identifier)
            except PackNotFoundError as exc:
                logger.error("%s", exc.message)
            else:
                return ResolvedBundle(bundle, used_external_pack=True)
        return ResolvedBundle(self._provider.get_own_bundle(), used_external_pack=False)

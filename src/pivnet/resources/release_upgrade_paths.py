"""Upgrade targets declared for a release."""

from __future__ import annotations

from typing import List

from ..models import ReleaseUpgradePath
from . import Service


class ReleaseUpgradePathsService(Service):
    def get(self, product_slug: str, release_id: int) -> List[ReleaseUpgradePath]:
        path = f"/products/{product_slug}/releases/{release_id}/upgrade_paths"
        data = self._request("GET", path, 200)
        return self._parse_list(ReleaseUpgradePath, data, "upgrade_paths", path)

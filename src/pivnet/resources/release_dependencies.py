"""Releases that a release depends on."""

from __future__ import annotations

from typing import List

from ..models import ReleaseDependency
from . import Service


class ReleaseDependenciesService(Service):
    def list(self, product_slug: str, release_id: int) -> List[ReleaseDependency]:
        path = f"/products/{product_slug}/releases/{release_id}/dependencies"
        data = self._request("GET", path, 200)
        return self._parse_list(ReleaseDependency, data, "dependencies", path)

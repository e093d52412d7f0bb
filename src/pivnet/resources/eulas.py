"""EULA listing and acceptance."""

from __future__ import annotations

from typing import List

from ..models import EULA, EULAAcceptance
from . import Service


class EULAsService(Service):
    def list(self) -> List[EULA]:
        path = "/eulas"
        data = self._request("GET", path, 200)
        return self._parse_list(EULA, data, "eulas", path)

    def get(self, slug: str) -> EULA:
        path = f"/eulas/{slug}"
        data = self._request("GET", path, 200)
        return self._parse(EULA, data, path)

    def accept(self, product_slug: str, release_id: int) -> EULAAcceptance:
        """Accept the EULA attached to a release on behalf of the token owner."""

        path = f"/products/{product_slug}/releases/{release_id}/eula_acceptance"
        data = self._request("POST", path, 200)
        return self._parse(EULAAcceptance, data or {}, path)

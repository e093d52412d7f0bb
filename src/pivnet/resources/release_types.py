"""Allowed release type names."""

from __future__ import annotations

from typing import List

from ..errors import DecodeError
from . import Service


class ReleaseTypesService(Service):
    def get(self) -> List[str]:
        path = "/releases/release_types"
        data = self._request("GET", path, 200)
        if not isinstance(data, dict) or not isinstance(data.get("release_types"), list):
            raise DecodeError("Expected an object with a 'release_types' list", path=path)
        return [str(release_type) for release_type in data["release_types"]]

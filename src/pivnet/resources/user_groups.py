"""User group listing and release association."""

from __future__ import annotations

from typing import List

from ..models import UserGroup
from . import Service


class UserGroupsService(Service):
    def list(self) -> List[UserGroup]:
        path = "/user_groups"
        data = self._request("GET", path, 200)
        return self._parse_list(UserGroup, data, "user_groups", path)

    def list_for_release(self, product_slug: str, release_id: int) -> List[UserGroup]:
        path = f"/products/{product_slug}/releases/{release_id}/user_groups"
        data = self._request("GET", path, 200)
        return self._parse_list(UserGroup, data, "user_groups", path)

    def add_to_release(self, product_slug: str, release_id: int, user_group_id: int) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/add_user_group"
        self._request("PATCH", path, 204, body={"user_group": {"id": user_group_id}})

    def remove_from_release(self, product_slug: str, release_id: int, user_group_id: int) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/remove_user_group"
        self._request("PATCH", path, 204, body={"user_group": {"id": user_group_id}})

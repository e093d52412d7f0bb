"""File groups and their association with releases."""

from __future__ import annotations

from typing import List

from ..models import CreateFileGroupConfig, FileGroup
from . import Service


class FileGroupsService(Service):
    def list(self, product_slug: str) -> List[FileGroup]:
        path = f"/products/{product_slug}/file_groups"
        data = self._request("GET", path, 200)
        return self._parse_list(FileGroup, data, "file_groups", path)

    def list_for_release(self, product_slug: str, release_id: int) -> List[FileGroup]:
        path = f"/products/{product_slug}/releases/{release_id}/file_groups"
        data = self._request("GET", path, 200)
        return self._parse_list(FileGroup, data, "file_groups", path)

    def get(self, product_slug: str, file_group_id: int) -> FileGroup:
        path = f"/products/{product_slug}/file_groups/{file_group_id}"
        data = self._request("GET", path, 200)
        return self._parse(FileGroup, data, path)

    def create(self, config: CreateFileGroupConfig) -> FileGroup:
        path = f"/products/{config.product_slug}/file_groups"
        data = self._request("POST", path, 201, body={"file_group": {"name": config.name}})
        return self._parse(FileGroup, data, path)

    def update(self, product_slug: str, file_group: FileGroup) -> FileGroup:
        path = f"/products/{product_slug}/file_groups/{file_group.id}"
        data = self._request("PATCH", path, 200, body={"file_group": {"name": file_group.name}})
        return self._parse(FileGroup, data, path)

    def delete(self, product_slug: str, file_group_id: int) -> FileGroup:
        path = f"/products/{product_slug}/file_groups/{file_group_id}"
        data = self._request("DELETE", path, 200)
        return self._parse(FileGroup, data, path)

    def add_to_release(self, product_slug: str, release_id: int, file_group_id: int) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/add_file_group"
        self._request("PATCH", path, 204, body={"file_group": {"id": file_group_id}})

    def remove_from_release(self, product_slug: str, release_id: int, file_group_id: int) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/remove_file_group"
        self._request("PATCH", path, 204, body={"file_group": {"id": file_group_id}})

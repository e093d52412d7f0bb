"""Product files and their association with releases."""

from __future__ import annotations

from typing import Any, Dict, List

from ..models import CreateProductFileConfig, ProductFile
from . import Service


_UPDATABLE_FIELDS = ("name", "description", "file_version", "md5", "sha256", "file_type")


class ProductFilesService(Service):
    def list(self, product_slug: str) -> List[ProductFile]:
        path = f"/products/{product_slug}/product_files"
        data = self._request("GET", path, 200)
        return self._parse_list(ProductFile, data, "product_files", path)

    def list_for_release(self, product_slug: str, release_id: int) -> List[ProductFile]:
        path = f"/products/{product_slug}/releases/{release_id}/product_files"
        data = self._request("GET", path, 200)
        return self._parse_list(ProductFile, data, "product_files", path)

    def get(self, product_slug: str, product_file_id: int) -> ProductFile:
        path = f"/products/{product_slug}/product_files/{product_file_id}"
        data = self._request("GET", path, 200)
        return self._parse_wrapped(ProductFile, data, "product_file", path)

    def get_for_release(
        self, product_slug: str, release_id: int, product_file_id: int
    ) -> ProductFile:
        path = f"/products/{product_slug}/releases/{release_id}/product_files/{product_file_id}"
        data = self._request("GET", path, 200)
        return self._parse_wrapped(ProductFile, data, "product_file", path)

    def create(self, config: CreateProductFileConfig) -> ProductFile:
        product_file: Dict[str, Any] = {
            "name": config.name,
            "aws_object_key": config.aws_object_key,
            "file_version": config.file_version,
            "file_type": config.file_type,
        }
        if config.md5 is not None:
            product_file["md5"] = config.md5
        if config.sha256 is not None:
            product_file["sha256"] = config.sha256
        if config.description is not None:
            product_file["description"] = config.description

        path = f"/products/{config.product_slug}/product_files"
        data = self._request("POST", path, 201, body={"product_file": product_file})
        return self._parse_wrapped(ProductFile, data, "product_file", path)

    def update(self, product_slug: str, product_file: ProductFile) -> ProductFile:
        """Update the mutable metadata of an existing product file.

        The object key and size are fixed at upload time and never sent.
        """

        body = {
            field: getattr(product_file, field)
            for field in _UPDATABLE_FIELDS
            if getattr(product_file, field) is not None
        }
        path = f"/products/{product_slug}/product_files/{product_file.id}"
        data = self._request("PATCH", path, 200, body={"product_file": body})
        return self._parse_wrapped(ProductFile, data, "product_file", path)

    def delete(self, product_slug: str, product_file_id: int) -> ProductFile:
        path = f"/products/{product_slug}/product_files/{product_file_id}"
        data = self._request("DELETE", path, 200)
        return self._parse_wrapped(ProductFile, data, "product_file", path)

    def add_to_release(self, product_slug: str, release_id: int, product_file_id: int) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/add_product_file"
        self._request("PATCH", path, 204, body={"product_file": {"id": product_file_id}})

    def remove_from_release(
        self, product_slug: str, release_id: int, product_file_id: int
    ) -> None:
        path = f"/products/{product_slug}/releases/{release_id}/remove_product_file"
        self._request("PATCH", path, 204, body={"product_file": {"id": product_file_id}})

"""Product lookup."""

from __future__ import annotations

from typing import List

from ..models import Product
from . import Service


class ProductsService(Service):
    def get(self, slug: str) -> Product:
        path = f"/products/{slug}"
        data = self._request("GET", path, 200)
        return self._parse(Product, data, path)

    def list(self) -> List[Product]:
        path = "/products"
        data = self._request("GET", path, 200)
        return self._parse_list(Product, data, "products", path)

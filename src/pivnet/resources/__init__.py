"""Resource services for the product-distribution API.

Each module wraps one resource kind:
- products: product lookup
- eulas: EULA listing and acceptance
- release_types: allowed release type names
- releases: release CRUD
- product_files: product file CRUD and release association
- file_groups: file group CRUD and release association
- release_upgrade_paths: upgrade targets for a release
- release_dependencies: releases a release depends on
- user_groups: user group listing and release association
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import DecodeError

if TYPE_CHECKING:
    from ..client import Client


ModelT = TypeVar("ModelT", bound=BaseModel)


class Service:
    """Base class for resource services.

    Provides access to the shared client and response decoding helpers.
    """

    def __init__(self, client: Client):
        self.client = client

    def _request(self, method: str, path: str, expected_status: int, body: Any = None) -> Any:
        return self.client.make_request(method, path, expected_status, body=body)

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"Unexpected {model.__name__} payload: {exc}", path=path) from exc

    @classmethod
    def _parse_list(cls, model: Type[ModelT], data: Any, key: str, path: str) -> List[ModelT]:
        if not isinstance(data, dict) or not isinstance(data.get(key, []), list):
            raise DecodeError(f"Expected an object with a '{key}' list", path=path)
        return [cls._parse(model, item, path) for item in data.get(key, [])]

    @classmethod
    def _parse_wrapped(cls, model: Type[ModelT], data: Any, key: str, path: str) -> ModelT:
        if not isinstance(data, dict) or key not in data:
            raise DecodeError(f"Expected an object with a '{key}' entry", path=path)
        return cls._parse(model, data[key], path)


__all__ = ["Service"]

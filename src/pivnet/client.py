"""HTTP transport for the product-distribution API."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .config import ClientConfig
from .errors import DecodeError, StatusCodeError
from .logging import get_logger
from .resources.eulas import EULAsService
from .resources.file_groups import FileGroupsService
from .resources.product_files import ProductFilesService
from .resources.products import ProductsService
from .resources.release_dependencies import ReleaseDependenciesService
from .resources.release_types import ReleaseTypesService
from .resources.release_upgrade_paths import ReleaseUpgradePathsService
from .resources.releases import ReleasesService
from .resources.user_groups import UserGroupsService


API_PREFIX = "/api/v2"

logger = get_logger("pivnet.http")


class Client:
    """Thin wrapper around :class:`httpx.Client` with one service per resource.

    Every call goes through :meth:`make_request`, which compares the response
    status against the status the caller expects and decodes the JSON body.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        headers = {
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        }
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        self._http = httpx.Client(
            base_url=f"{config.host.rstrip('/')}{API_PREFIX}",
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

        self.products = ProductsService(self)
        self.eulas = EULAsService(self)
        self.release_types = ReleaseTypesService(self)
        self.releases = ReleasesService(self)
        self.product_files = ProductFilesService(self)
        self.file_groups = FileGroupsService(self)
        self.release_upgrade_paths = ReleaseUpgradePathsService(self)
        self.release_dependencies = ReleaseDependenciesService(self)
        self.user_groups = UserGroupsService(self)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def make_request(
        self,
        method: str,
        path: str,
        expected_status: int,
        body: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body, or ``None`` if empty.

        Raises :class:`StatusCodeError` when the status differs from
        ``expected_status`` and :class:`DecodeError` for a body that is not
        valid UTF-8 JSON.
        Connection failures surface as :class:`httpx.RequestError`.
        """

        request = self._http.build_request(method, path, json=body)
        logger.debug(
            "Sending request",
            extra={
                "method": method,
                "url": str(request.url),
                "headers": dict(request.headers),
            },
        )
        response = self._http.send(request)
        logger.debug(
            "Received response",
            extra={
                "method": method,
                "url": str(request.url),
                "status_code": response.status_code,
            },
        )

        if response.status_code != expected_status:
            raise StatusCodeError(
                response.status_code,
                expected_status,
                method=method,
                path=path,
            )

        if not response.content:
            return None
        try:
            return response.json()
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON in response: {exc}", path=path) from exc

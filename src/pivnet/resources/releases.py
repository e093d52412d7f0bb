"""Release create/read/update/delete."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from ..models import OSS_COMPLIANT_CONFIRM, CreateReleaseConfig, Release
from . import Service


_OPTIONAL_FIELDS = (
    "description",
    "release_notes_url",
    "controlled",
    "eccn",
    "license_exception",
    "end_of_support_date",
    "end_of_guidance_date",
    "end_of_availability_date",
)

# Server-generated links and the EULA body are never sent back; the EULA is
# referenced by slug and id only.
_SERVER_FIELDS = {"links": True, "eula": {"name", "content", "links"}}


class ReleasesService(Service):
    def list(self, product_slug: str) -> List[Release]:
        path = f"/products/{product_slug}/releases"
        data = self._request("GET", path, 200)
        return self._parse_list(Release, data, "releases", path)

    def get(self, product_slug: str, release_id: int) -> Release:
        path = f"/products/{product_slug}/releases/{release_id}"
        data = self._request("GET", path, 200)
        return self._parse(Release, data, path)

    def create(self, config: CreateReleaseConfig) -> Release:
        """Create a release from ``config``.

        ``release_date`` defaults to today's date. Optional fields set to
        ``None`` are left out of the request body.
        """

        release: Dict[str, Any] = {
            "version": config.product_version,
            "release_type": config.release_type,
            "availability": config.availability,
            "oss_compliant": config.oss_compliant,
            "release_date": config.release_date or date.today().strftime("%Y-%m-%d"),
        }
        if config.eula_slug is not None:
            release["eula"] = {"slug": config.eula_slug}
        for field in _OPTIONAL_FIELDS:
            value = getattr(config, field)
            if value is not None:
                release[field] = value

        path = f"/products/{config.product_slug}/releases"
        data = self._request("POST", path, 201, body={"release": release})
        return self._parse_wrapped(Release, data, "release", path)

    def update(self, product_slug: str, release: Release) -> Release:
        """Send the full release representation, marking it OSS compliant."""

        body = release.model_copy(update={"oss_compliant": OSS_COMPLIANT_CONFIRM}).model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=_SERVER_FIELDS,
        )
        path = f"/products/{product_slug}/releases/{release.id}"
        data = self._request("PATCH", path, 200, body={"release": body})
        return self._parse_wrapped(Release, data, "release", path)

    def delete(self, release: Release, product_slug: str) -> None:
        path = f"/products/{product_slug}/releases/{release.id}"
        self._request("DELETE", path, 204)

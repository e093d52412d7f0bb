"""Entity models mirroring the API's JSON shapes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


AVAILABILITY_ADMINS_ONLY = "Admins Only"
AVAILABILITY_SELECTED_USER_GROUPS = "Selected User Groups Only"
AVAILABILITY_ALL_USERS = "All Users"
OSS_COMPLIANT_CONFIRM = "confirm"
FILE_TYPE_SOFTWARE = "Software"


class ApiModel(BaseModel):
    """Base model: ignores unknown fields and keeps wire-level aliases."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping with unset fields omitted."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Product(ApiModel):
    id: Optional[int] = None
    slug: Optional[str] = None
    name: Optional[str] = None


class EULA(ApiModel):
    id: Optional[int] = None
    slug: Optional[str] = None
    name: Optional[str] = None
    content: Optional[str] = None
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")


class EULAAcceptance(ApiModel):
    accepted_at: Optional[str] = None


class Release(ApiModel):
    id: Optional[int] = None
    version: Optional[str] = None
    description: Optional[str] = None
    release_type: Optional[str] = None
    release_date: Optional[str] = None
    availability: Optional[str] = None
    oss_compliant: Optional[str] = None
    eula: Optional[EULA] = None
    release_notes_url: Optional[str] = None
    controlled: Optional[bool] = None
    eccn: Optional[str] = None
    license_exception: Optional[str] = None
    end_of_support_date: Optional[str] = None
    end_of_guidance_date: Optional[str] = None
    end_of_availability_date: Optional[str] = None
    updated_at: Optional[str] = None
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")


class ProductFile(ApiModel):
    id: Optional[int] = None
    name: Optional[str] = None
    aws_object_key: Optional[str] = None
    file_type: Optional[str] = None
    file_version: Optional[str] = None
    md5: Optional[str] = None
    sha256: Optional[str] = None
    description: Optional[str] = None
    released_at: Optional[str] = None
    size: Optional[int] = None
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")


class FileGroupProduct(ApiModel):
    id: Optional[int] = None
    name: Optional[str] = None


class FileGroup(ApiModel):
    id: Optional[int] = None
    name: Optional[str] = None
    product: Optional[FileGroupProduct] = None
    product_files: List[ProductFile] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")


class UpgradePathRelease(ApiModel):
    id: Optional[int] = None
    version: Optional[str] = None


class ReleaseUpgradePath(ApiModel):
    release: UpgradePathRelease


class DependentRelease(ApiModel):
    id: Optional[int] = None
    version: Optional[str] = None
    product: Optional[Product] = None


class ReleaseDependency(ApiModel):
    release: DependentRelease


class UserGroup(ApiModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CreateReleaseConfig:
    """Fields for a new release.

    Optional string fields left as ``None`` are not sent; an empty string is
    sent as-is so a value can be explicitly blank.
    """

    product_slug: str
    product_version: str
    release_type: str
    eula_slug: Optional[str] = None
    description: Optional[str] = None
    release_notes_url: Optional[str] = None
    release_date: Optional[str] = None
    availability: str = AVAILABILITY_ADMINS_ONLY
    oss_compliant: str = OSS_COMPLIANT_CONFIRM
    controlled: Optional[bool] = None
    eccn: Optional[str] = None
    license_exception: Optional[str] = None
    end_of_support_date: Optional[str] = None
    end_of_guidance_date: Optional[str] = None
    end_of_availability_date: Optional[str] = None


@dataclass(frozen=True)
class CreateProductFileConfig:
    """Fields for a new product file uploaded to the product's bucket."""

    product_slug: str
    name: str
    aws_object_key: str
    file_version: str
    md5: Optional[str] = None
    sha256: Optional[str] = None
    description: Optional[str] = None
    file_type: str = FILE_TYPE_SOFTWARE


@dataclass(frozen=True)
class CreateFileGroupConfig:
    product_slug: str
    name: str

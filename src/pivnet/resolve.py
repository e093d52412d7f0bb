"""Resolve human-readable identifiers to API entities.

Each helper lists the candidates first, then does a linear search with an
exact-match predicate. Nothing is cached between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Optional, TypeVar

from .errors import NotFoundError
from .models import EULA, FileGroup, ProductFile, Release

if TYPE_CHECKING:
    from .client import Client


T = TypeVar("T")


def find_first(items: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    for item in items:
        if predicate(item):
            return item
    return None


def release_by_version(client: Client, product_slug: str, version: str) -> Release:
    releases = client.releases.list(product_slug)
    release = find_first(releases, lambda r: r.version == version)
    if release is None:
        raise NotFoundError("release", version, scope=product_slug)
    return release


def product_file_by_name(client: Client, product_slug: str, name: str) -> ProductFile:
    product_files = client.product_files.list(product_slug)
    product_file = find_first(product_files, lambda f: f.name == name)
    if product_file is None:
        raise NotFoundError("product file", name, scope=product_slug)
    return product_file


def file_group_by_name(client: Client, product_slug: str, name: str) -> FileGroup:
    file_groups = client.file_groups.list(product_slug)
    file_group = find_first(file_groups, lambda g: g.name == name)
    if file_group is None:
        raise NotFoundError("file group", name, scope=product_slug)
    return file_group


def eula_by_slug(client: Client, slug: str) -> EULA:
    eula = find_first(client.eulas.list(), lambda e: e.slug == slug)
    if eula is None:
        raise NotFoundError("EULA", slug)
    return eula

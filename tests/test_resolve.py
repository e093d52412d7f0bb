import pytest

from pivnet.errors import NotFoundError
from pivnet.resolve import eula_by_slug, file_group_by_name, product_file_by_name, release_by_version


def test_release_by_version_matches_exactly(api, client) -> None:
    api.add(
        "GET",
        "/products/banana/releases",
        json_body={"releases": [{"id": 1, "version": "1.2.30"}, {"id": 2, "version": "1.2.3"}]},
    )

    assert release_by_version(client, "banana", "1.2.3").id == 2


def test_release_by_version_not_found(api, client) -> None:
    api.add("GET", "/products/banana/releases", json_body={"releases": [{"id": 1, "version": "1.2.3"}]})

    with pytest.raises(NotFoundError) as excinfo:
        release_by_version(client, "banana", "1.2")

    assert excinfo.value.kind == "release"
    assert excinfo.value.identifier == "1.2"
    assert "banana" in str(excinfo.value)


def test_product_file_and_file_group_by_name(api, client) -> None:
    api.add("GET", "/products/banana/product_files", json_body={"product_files": [{"id": 3, "name": "tile"}]})
    api.add("GET", "/products/banana/file_groups", json_body={"file_groups": [{"id": 5, "name": "docs"}]})

    assert product_file_by_name(client, "banana", "tile").id == 3
    assert file_group_by_name(client, "banana", "docs").id == 5
    with pytest.raises(NotFoundError):
        product_file_by_name(client, "banana", "Tile")
    with pytest.raises(NotFoundError):
        file_group_by_name(client, "banana", "doc")


def test_eula_by_slug(api, client) -> None:
    api.add("GET", "/eulas", json_body={"eulas": [{"id": 15, "slug": "some-eula"}]})

    assert eula_by_slug(client, "some-eula").id == 15
    with pytest.raises(NotFoundError):
        eula_by_slug(client, "other-eula")

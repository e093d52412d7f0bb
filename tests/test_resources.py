import pytest

from pivnet.errors import DecodeError, StatusCodeError
from pivnet.models import CreateFileGroupConfig, CreateProductFileConfig, FileGroup, ProductFile


def test_product_get_and_list(api, client) -> None:
    api.add("GET", "/products/some-product", json_body={"id": 1234, "slug": "some-product", "name": "Some"})
    api.add("GET", "/products", json_body={"products": [{"id": 1, "slug": "a"}, {"id": 2, "slug": "b"}]})

    product = client.products.get("some-product")
    products = client.products.list()

    assert (product.id, product.slug, product.name) == (1234, "some-product", "Some")
    assert [p.slug for p in products] == ["a", "b"]


def test_list_with_wrong_shape_raises_decode_error(api, client) -> None:
    api.add("GET", "/products", json_body=[{"id": 1}])

    with pytest.raises(DecodeError):
        client.products.list()


def test_eulas_list_get_and_accept(api, client) -> None:
    api.add(
        "GET",
        "/eulas",
        json_body={"eulas": [{"id": 1234, "slug": "some-eula", "name": "some eula"}]},
    )
    api.add("GET", "/eulas/some-eula", json_body={"id": 1234, "slug": "some-eula", "content": "terms"})
    api.add(
        "POST",
        "/products/banana/releases/7/eula_acceptance",
        json_body={"accepted_at": "2016-01-11"},
    )

    assert client.eulas.list()[0].name == "some eula"
    assert client.eulas.get("some-eula").content == "terms"
    acceptance = client.eulas.accept("banana", 7)

    assert acceptance.accepted_at == "2016-01-11"
    assert api.requests[-1].content == b""


def test_eula_accept_non_200_raises(api, client) -> None:
    api.add("POST", "/products/banana/releases/7/eula_acceptance", status=418)

    with pytest.raises(StatusCodeError, match="418 for the request - expected 200"):
        client.eulas.accept("banana", 7)


def test_release_types(api, client) -> None:
    api.add("GET", "/releases/release_types", json_body={"release_types": ["Major Release", "Beta"]})

    assert client.release_types.get() == ["Major Release", "Beta"]


def test_product_files_list_and_get(api, client) -> None:
    api.add("GET", "/products/banana/product_files", json_body={"product_files": [{"id": 3, "name": "a"}]})
    api.add(
        "GET",
        "/products/banana/releases/9/product_files",
        json_body={"product_files": [{"id": 4, "name": "b"}]},
    )
    api.add("GET", "/products/banana/product_files/3", json_body={"product_file": {"id": 3, "name": "a"}})
    api.add(
        "GET",
        "/products/banana/releases/9/product_files/4",
        json_body={"product_file": {"id": 4, "name": "b", "aws_object_key": "k"}},
    )

    assert client.product_files.list("banana")[0].id == 3
    assert client.product_files.list_for_release("banana", 9)[0].id == 4
    assert client.product_files.get("banana", 3).name == "a"
    assert client.product_files.get_for_release("banana", 9, 4).aws_object_key == "k"


def test_product_file_create(api, client) -> None:
    api.add(
        "POST",
        "/products/banana/product_files",
        status=201,
        json_body={"product_file": {"id": 11, "name": "tile"}},
    )
    config = CreateProductFileConfig(
        product_slug="banana",
        name="tile",
        aws_object_key="product/banana/tile.pivotal",
        file_version="1.0",
        md5="abc",
    )

    product_file = client.product_files.create(config)

    assert product_file.id == 11
    assert api.body() == {
        "product_file": {
            "name": "tile",
            "aws_object_key": "product/banana/tile.pivotal",
            "file_version": "1.0",
            "file_type": "Software",
            "md5": "abc",
        }
    }


def test_product_file_update_sends_mutable_fields_only(api, client) -> None:
    api.add(
        "PATCH",
        "/products/banana/product_files/11",
        json_body={"product_file": {"id": 11, "name": "renamed"}},
    )
    product_file = ProductFile(id=11, name="renamed", aws_object_key="k", size=10, file_version="2.0")

    updated = client.product_files.update("banana", product_file)

    assert updated.name == "renamed"
    assert api.body() == {"product_file": {"name": "renamed", "file_version": "2.0"}}


def test_product_file_delete_returns_deleted_file(api, client) -> None:
    api.add("DELETE", "/products/banana/product_files/11", json_body={"product_file": {"id": 11}})

    assert client.product_files.delete("banana", 11).id == 11


def test_product_file_delete_expects_200(api, client) -> None:
    api.add("DELETE", "/products/banana/product_files/11", status=204)

    with pytest.raises(StatusCodeError, match="204 for the request - expected 200"):
        client.product_files.delete("banana", 11)


@pytest.mark.parametrize(
    "method_name,action",
    [("add_to_release", "add_product_file"), ("remove_from_release", "remove_product_file")],
)
def test_product_file_release_association(api, client, method_name: str, action: str) -> None:
    api.add("PATCH", f"/products/banana/releases/9/{action}", status=204)

    getattr(client.product_files, method_name)("banana", 9, 11)

    assert api.body() == {"product_file": {"id": 11}}


def test_product_file_association_non_204_raises(api, client) -> None:
    api.add("PATCH", "/products/banana/releases/9/add_product_file", status=418)

    with pytest.raises(StatusCodeError, match="418 for the request - expected 204"):
        client.product_files.add_to_release("banana", 9, 11)


def test_file_groups(api, client) -> None:
    group = {"id": 5, "name": "docs", "product": {"id": 1, "name": "Banana"}, "product_files": [{"id": 3}]}
    api.add("GET", "/products/banana/file_groups", json_body={"file_groups": [group]})
    api.add("GET", "/products/banana/releases/9/file_groups", json_body={"file_groups": []})
    api.add("GET", "/products/banana/file_groups/5", json_body=group)

    assert client.file_groups.list("banana")[0].product.name == "Banana"
    assert client.file_groups.list_for_release("banana", 9) == []
    assert client.file_groups.get("banana", 5).product_files[0].id == 3


def test_file_group_create_update_delete(api, client) -> None:
    api.add("POST", "/products/banana/file_groups", status=201, json_body={"id": 5, "name": "docs"})
    api.add("PATCH", "/products/banana/file_groups/5", json_body={"id": 5, "name": "manuals"})
    api.add("DELETE", "/products/banana/file_groups/5", json_body={"id": 5, "name": "manuals"})

    created = client.file_groups.create(CreateFileGroupConfig(product_slug="banana", name="docs"))
    assert api.body() == {"file_group": {"name": "docs"}}

    updated = client.file_groups.update("banana", FileGroup(id=created.id, name="manuals"))
    assert api.body() == {"file_group": {"name": "manuals"}}

    deleted = client.file_groups.delete("banana", 5)
    assert (updated.name, deleted.id) == ("manuals", 5)


def test_file_group_release_association(api, client) -> None:
    api.add("PATCH", "/products/banana/releases/9/add_file_group", status=204)
    api.add("PATCH", "/products/banana/releases/9/remove_file_group", status=204)

    client.file_groups.add_to_release("banana", 9, 5)
    client.file_groups.remove_from_release("banana", 9, 5)

    assert api.body(0) == {"file_group": {"id": 5}}
    assert api.paths()[1] == "PATCH /api/v2/products/banana/releases/9/remove_file_group"


def test_release_upgrade_paths(api, client) -> None:
    api.add(
        "GET",
        "/products/banana/releases/9/upgrade_paths",
        json_body={"upgrade_paths": [{"release": {"id": 8, "version": "1.0"}}]},
    )

    paths = client.release_upgrade_paths.get("banana", 9)

    assert (paths[0].release.id, paths[0].release.version) == (8, "1.0")


def test_release_dependencies(api, client) -> None:
    api.add(
        "GET",
        "/products/banana/releases/9/dependencies",
        json_body={
            "dependencies": [
                {"release": {"id": 30, "version": "2.1", "product": {"id": 2, "name": "Stemcells"}}}
            ]
        },
    )

    dependencies = client.release_dependencies.list("banana", 9)

    assert dependencies[0].release.product.name == "Stemcells"


def test_user_groups(api, client) -> None:
    api.add("GET", "/user_groups", json_body={"user_groups": [{"id": 1, "name": "all"}]})
    api.add(
        "GET",
        "/products/banana/releases/9/user_groups",
        json_body={"user_groups": [{"id": 2, "name": "beta"}]},
    )
    api.add("PATCH", "/products/banana/releases/9/add_user_group", status=204)
    api.add("PATCH", "/products/banana/releases/9/remove_user_group", status=204)

    assert client.user_groups.list()[0].name == "all"
    assert client.user_groups.list_for_release("banana", 9)[0].name == "beta"
    client.user_groups.add_to_release("banana", 9, 2)
    assert api.body() == {"user_group": {"id": 2}}
    client.user_groups.remove_from_release("banana", 9, 2)
    assert api.paths()[-1] == "PATCH /api/v2/products/banana/releases/9/remove_user_group"

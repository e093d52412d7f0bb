"""Command-line client for the product-distribution API."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Iterable, MutableMapping, Optional, TextIO

import httpx

from . import __version__
from .client import Client
from .config import CONFIG_ENV_PREFIX, LOG_FORMATS, LOG_LEVELS, OUTPUT_FORMATS, ClientConfig, load_config
from .errors import PivnetError
from .logging import configure_logging, get_logger
from .models import (
    AVAILABILITY_ADMINS_ONLY,
    AVAILABILITY_ALL_USERS,
    AVAILABILITY_SELECTED_USER_GROUPS,
    EULA,
    CreateReleaseConfig,
    Release,
)
from .output import print_output
from .resolve import eula_by_slug, file_group_by_name, product_file_by_name, release_by_version


logger = get_logger("pivnet.cli")

AVAILABILITY_CHOICES = {
    "admins": AVAILABILITY_ADMINS_ONLY,
    "selected-user-groups": AVAILABILITY_SELECTED_USER_GROUPS,
    "all": AVAILABILITY_ALL_USERS,
}


class CliError(Exception):
    """Raised when the CLI encounters an expected error condition."""


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose help output goes to stderr.

    Subcommand parsers inherit this class, so `pivnet <command> -h` behaves
    the same way.
    """

    def print_help(self, file: Optional[TextIO] = None) -> None:
        super().print_help(file if file is not None else sys.stderr)


Handler = Callable[[ClientConfig, Client, argparse.Namespace], None]


def _add_global_options(parser: argparse.ArgumentParser, suppress: bool) -> None:
    # Subcommands repeat the global options so they may follow the command name;
    # SUPPRESS keeps an omitted flag from clobbering one given before it.
    default: Any = argparse.SUPPRESS if suppress else None
    parser.add_argument(
        "--api-token",
        default=default,
        help=f"API token sent as a bearer token (env: {CONFIG_ENV_PREFIX}API_TOKEN).",
    )
    parser.add_argument(
        "--host",
        "--endpoint",
        dest="host",
        default=default,
        help=f"Base URL of the API server (env: {CONFIG_ENV_PREFIX}HOST).",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=default,
        help=f"Output format (env: {CONFIG_ENV_PREFIX}OUTPUT_FORMAT). Defaults to 'text'.",
    )
    parser.add_argument(
        "--config",
        default=default,
        help=f"Path to a TOML config file (env: {CONFIG_ENV_PREFIX}CONFIG).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=default,
        help="Request timeout in seconds.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=default,
        help="Log verbosity written to stderr. Use DEBUG to trace HTTP requests.",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=default,
        help="Log line format.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="pivnet",
        description=(
            "CLI for the Pivotal Network API. Uses PIVNET_* env vars for defaults "
            "and prints text tables (default), JSON, or YAML. Examples: "
            "`pivnet releases -s my-product`, `pivnet --format json release "
            "-s my-product -r 1.2.3`."
        ),
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    _add_global_options(parser, suppress=False)

    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, suppress=True)

    subparsers = parser.add_subparsers(dest="command", required=False)

    _add_product_commands(subparsers, common)
    _add_eula_commands(subparsers, common)
    _add_release_commands(subparsers, common)
    _add_product_file_commands(subparsers, common)
    _add_file_group_commands(subparsers, common)
    _add_user_group_commands(subparsers, common)

    return parser


def _add_product_slug(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-s", "--product-slug", required=True, help="Product slug")


def _add_release_selector(parser: argparse.ArgumentParser, required: bool = True) -> None:
    group = parser.add_mutually_exclusive_group(required=required)
    group.add_argument(
        "-r",
        "--release-version",
        help="Release version; resolved to an ID by listing the product's releases",
    )
    group.add_argument("--release-id", type=int, help="Numeric release ID")


def _add_product_file_selector(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--product-file-id", type=int, help="Numeric product file ID")
    group.add_argument("--product-file-name", help="Product file name (exact match)")


def _add_file_group_selector(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--file-group-id", type=int, help="Numeric file group ID")
    group.add_argument("--file-group-name", help="File group name (exact match)")


def _add_product_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    product = subparsers.add_parser(
        "product",
        parents=[common],
        help="Show a product (GET /products/{slug})",
    )
    _add_product_slug(product)
    product.set_defaults(func=_cmd_product)

    products = subparsers.add_parser(
        "products",
        parents=[common],
        help="List products (GET /products)",
    )
    products.set_defaults(func=_cmd_products)


def _add_eula_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    eulas = subparsers.add_parser(
        "eulas",
        parents=[common],
        help="List EULAs (GET /eulas)",
    )
    eulas.set_defaults(func=_cmd_eulas)

    eula = subparsers.add_parser(
        "eula",
        parents=[common],
        help="Show a EULA including its content (GET /eulas/{slug})",
    )
    eula.add_argument("--eula-slug", required=True, help="EULA slug")
    eula.set_defaults(func=_cmd_eula)

    accept = subparsers.add_parser(
        "accept-eula",
        parents=[common],
        help="Accept the EULA of a release (POST .../releases/{id}/eula_acceptance)",
    )
    _add_product_slug(accept)
    _add_release_selector(accept)
    accept.set_defaults(func=_cmd_accept_eula)


def _add_release_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    release_types = subparsers.add_parser(
        "release-types",
        parents=[common],
        help="List release types (GET /releases/release_types)",
    )
    release_types.set_defaults(func=_cmd_release_types)

    releases = subparsers.add_parser(
        "releases",
        parents=[common],
        help="List releases of a product (GET /products/{slug}/releases)",
    )
    _add_product_slug(releases)
    releases.set_defaults(func=_cmd_releases)

    release = subparsers.add_parser(
        "release",
        parents=[common],
        help="Show a release (GET /products/{slug}/releases/{id})",
    )
    _add_product_slug(release)
    _add_release_selector(release)
    release.set_defaults(func=_cmd_release)

    create = subparsers.add_parser(
        "create-release",
        parents=[common],
        help="Create a release (POST /products/{slug}/releases)",
        description=(
            "Creates an admin-only, OSS-compliant release. The release date "
            "defaults to today."
        ),
    )
    _add_product_slug(create)
    create.add_argument("-r", "--release-version", required=True, help="Version of the new release")
    create.add_argument("-t", "--release-type", required=True, help="Release type (see release-types)")
    create.add_argument("-e", "--eula-slug", help="Slug of the EULA attached to the release")
    create.add_argument("--description", help="Release description (an empty string is sent as-is)")
    create.add_argument("--release-notes-url", help="Release notes URL (an empty string is sent as-is)")
    create.add_argument("--release-date", help="Release date as YYYY-MM-DD")
    create.add_argument(
        "--availability",
        choices=sorted(AVAILABILITY_CHOICES),
        help="Who can see the release (default: admins)",
    )
    create.set_defaults(func=_cmd_create_release)

    update = subparsers.add_parser(
        "update-release",
        parents=[common],
        help="Update a release (PATCH /products/{slug}/releases/{id})",
        description=(
            "Fetches the release, applies the provided fields, and sends the full "
            "release back. At least one field is required."
        ),
    )
    _add_product_slug(update)
    _add_release_selector(update)
    update.add_argument(
        "--availability",
        choices=sorted(AVAILABILITY_CHOICES),
        help="Who can see the release",
    )
    update.add_argument("--release-type", help="Release type")
    update.add_argument("--description", help="Release description")
    update.add_argument("--release-notes-url", help="Release notes URL")
    update.add_argument("--eula-slug", help="Slug of the EULA to attach")
    update.set_defaults(func=_cmd_update_release)

    delete = subparsers.add_parser(
        "delete-release",
        parents=[common],
        help="Delete a release (DELETE /products/{slug}/releases/{id})",
    )
    _add_product_slug(delete)
    _add_release_selector(delete)
    delete.set_defaults(func=_cmd_delete_release)

    upgrade_paths = subparsers.add_parser(
        "release-upgrade-paths",
        parents=[common],
        help="List releases that can upgrade to a release (GET .../upgrade_paths)",
    )
    _add_product_slug(upgrade_paths)
    _add_release_selector(upgrade_paths)
    upgrade_paths.set_defaults(func=_cmd_release_upgrade_paths)

    dependencies = subparsers.add_parser(
        "release-dependencies",
        parents=[common],
        help="List releases a release depends on (GET .../dependencies)",
    )
    _add_product_slug(dependencies)
    _add_release_selector(dependencies)
    dependencies.set_defaults(func=_cmd_release_dependencies)


def _add_product_file_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    product_files = subparsers.add_parser(
        "product-files",
        parents=[common],
        help="List product files of a product, or of one release when -r/--release-id is given",
    )
    _add_product_slug(product_files)
    _add_release_selector(product_files, required=False)
    product_files.set_defaults(func=_cmd_product_files)

    product_file = subparsers.add_parser(
        "product-file",
        parents=[common],
        help="Show a product file, optionally scoped to a release",
    )
    _add_product_slug(product_file)
    _add_release_selector(product_file, required=False)
    _add_product_file_selector(product_file)
    product_file.set_defaults(func=_cmd_product_file)

    add = subparsers.add_parser(
        "add-product-file",
        parents=[common],
        help="Add a product file to a release (PATCH .../add_product_file)",
    )
    _add_product_slug(add)
    _add_release_selector(add)
    _add_product_file_selector(add)
    add.set_defaults(func=_cmd_add_product_file)

    remove = subparsers.add_parser(
        "remove-product-file",
        parents=[common],
        help="Remove a product file from a release (PATCH .../remove_product_file)",
    )
    _add_product_slug(remove)
    _add_release_selector(remove)
    _add_product_file_selector(remove)
    remove.set_defaults(func=_cmd_remove_product_file)

    delete = subparsers.add_parser(
        "delete-product-file",
        parents=[common],
        help="Delete a product file (DELETE /products/{slug}/product_files/{id})",
    )
    _add_product_slug(delete)
    _add_product_file_selector(delete)
    delete.set_defaults(func=_cmd_delete_product_file)


def _add_file_group_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    file_groups = subparsers.add_parser(
        "file-groups",
        parents=[common],
        help="List file groups of a product, or of one release when -r/--release-id is given",
    )
    _add_product_slug(file_groups)
    _add_release_selector(file_groups, required=False)
    file_groups.set_defaults(func=_cmd_file_groups)

    file_group = subparsers.add_parser(
        "file-group",
        parents=[common],
        help="Show a file group (GET /products/{slug}/file_groups/{id})",
    )
    _add_product_slug(file_group)
    _add_file_group_selector(file_group)
    file_group.set_defaults(func=_cmd_file_group)

    delete = subparsers.add_parser(
        "delete-file-group",
        parents=[common],
        help="Delete a file group (DELETE /products/{slug}/file_groups/{id})",
    )
    _add_product_slug(delete)
    _add_file_group_selector(delete)
    delete.set_defaults(func=_cmd_delete_file_group)


def _add_user_group_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    user_groups = subparsers.add_parser(
        "user-groups",
        parents=[common],
        help="List all user groups, or those of one release with -s and -r together",
    )
    user_groups.add_argument("-s", "--product-slug", help="Product slug (requires -r)")
    user_groups.add_argument("-r", "--release-version", help="Release version (requires -s)")
    user_groups.set_defaults(func=_cmd_user_groups)

    add = subparsers.add_parser(
        "add-user-group",
        parents=[common],
        help="Grant a user group access to a release (PATCH .../add_user_group)",
    )
    _add_product_slug(add)
    _add_release_selector(add)
    add.add_argument("-i", "--user-group-id", type=int, required=True, help="Numeric user group ID")
    add.set_defaults(func=_cmd_add_user_group)

    remove = subparsers.add_parser(
        "remove-user-group",
        parents=[common],
        help="Revoke a user group's access to a release (PATCH .../remove_user_group)",
    )
    _add_product_slug(remove)
    _add_release_selector(remove)
    remove.add_argument("-i", "--user-group-id", type=int, required=True, help="Numeric user group ID")
    remove.set_defaults(func=_cmd_remove_user_group)


def _build_client(config: ClientConfig) -> Client:
    return Client(config)


def _print_output(data: Any, config: ClientConfig) -> None:
    print_output(data, config.output_format)


def _release_id(client: Client, args: argparse.Namespace) -> int:
    if getattr(args, "release_id", None) is not None:
        return args.release_id
    release = release_by_version(client, args.product_slug, args.release_version)
    return release.id


def _optional_release_id(client: Client, args: argparse.Namespace) -> Optional[int]:
    if args.release_id is None and args.release_version is None:
        return None
    return _release_id(client, args)


def _product_file_id(client: Client, args: argparse.Namespace) -> int:
    if args.product_file_id is not None:
        return args.product_file_id
    return product_file_by_name(client, args.product_slug, args.product_file_name).id


def _file_group_id(client: Client, args: argparse.Namespace) -> int:
    if args.file_group_id is not None:
        return args.file_group_id
    return file_group_by_name(client, args.product_slug, args.file_group_name).id


def _cmd_product(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.products.get(args.product_slug), config)


def _cmd_products(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.products.list(), config)


def _cmd_eulas(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.eulas.list(), config)


def _cmd_eula(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.eulas.get(args.eula_slug), config)


def _cmd_accept_eula(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _release_id(client, args)
    _print_output(client.eulas.accept(args.product_slug, release_id), config)


def _cmd_release_types(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.release_types.get(), config)


def _cmd_releases(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    _print_output(client.releases.list(args.product_slug), config)


def _cmd_release(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _release_id(client, args)
    _print_output(client.releases.get(args.product_slug, release_id), config)


def _cmd_create_release(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    options: MutableMapping[str, Any] = {}
    if args.availability:
        options["availability"] = AVAILABILITY_CHOICES[args.availability]
    release_config = CreateReleaseConfig(
        product_slug=args.product_slug,
        product_version=args.release_version,
        release_type=args.release_type,
        eula_slug=args.eula_slug,
        description=args.description,
        release_notes_url=args.release_notes_url,
        release_date=args.release_date,
        **options,
    )
    _print_output(client.releases.create(release_config), config)


def _cmd_update_release(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    changes: MutableMapping[str, Any] = {}
    if args.availability:
        changes["availability"] = AVAILABILITY_CHOICES[args.availability]
    if args.release_type:
        changes["release_type"] = args.release_type
    if args.description is not None:
        changes["description"] = args.description
    if args.release_notes_url is not None:
        changes["release_notes_url"] = args.release_notes_url
    if args.eula_slug == "":
        raise CliError("--eula-slug must not be empty")
    if not changes and args.eula_slug is None:
        raise CliError("No updates provided")

    release_id = _release_id(client, args)
    release: Release = client.releases.get(args.product_slug, release_id)
    if args.eula_slug is not None:
        eula = eula_by_slug(client, args.eula_slug)
        changes["eula"] = EULA(slug=eula.slug, id=eula.id)
    updated = client.releases.update(args.product_slug, release.model_copy(update=changes))
    _print_output(updated, config)


def _cmd_delete_release(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    if args.release_id is not None:
        release = Release(id=args.release_id)
    else:
        release = release_by_version(client, args.product_slug, args.release_version)
    client.releases.delete(release, args.product_slug)
    logger.info("Deleted release", extra={"release_id": release.id, "product_slug": args.product_slug})
    _print_output({"status": "deleted", "release_id": release.id}, config)


def _cmd_release_upgrade_paths(
    config: ClientConfig, client: Client, args: argparse.Namespace
) -> None:
    release_id = _release_id(client, args)
    _print_output(client.release_upgrade_paths.get(args.product_slug, release_id), config)


def _cmd_release_dependencies(
    config: ClientConfig, client: Client, args: argparse.Namespace
) -> None:
    release_id = _release_id(client, args)
    _print_output(client.release_dependencies.list(args.product_slug, release_id), config)


def _cmd_product_files(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _optional_release_id(client, args)
    if release_id is None:
        data = client.product_files.list(args.product_slug)
    else:
        data = client.product_files.list_for_release(args.product_slug, release_id)
    _print_output(data, config)


def _cmd_product_file(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    product_file_id = _product_file_id(client, args)
    release_id = _optional_release_id(client, args)
    if release_id is None:
        data = client.product_files.get(args.product_slug, product_file_id)
    else:
        data = client.product_files.get_for_release(args.product_slug, release_id, product_file_id)
    _print_output(data, config)


def _cmd_add_product_file(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _release_id(client, args)
    product_file_id = _product_file_id(client, args)
    client.product_files.add_to_release(args.product_slug, release_id, product_file_id)
    _print_output(
        {"status": "added", "product_file_id": product_file_id, "release_id": release_id},
        config,
    )


def _cmd_remove_product_file(
    config: ClientConfig, client: Client, args: argparse.Namespace
) -> None:
    release_id = _release_id(client, args)
    product_file_id = _product_file_id(client, args)
    client.product_files.remove_from_release(args.product_slug, release_id, product_file_id)
    _print_output(
        {"status": "removed", "product_file_id": product_file_id, "release_id": release_id},
        config,
    )


def _cmd_delete_product_file(
    config: ClientConfig, client: Client, args: argparse.Namespace
) -> None:
    product_file_id = _product_file_id(client, args)
    _print_output(client.product_files.delete(args.product_slug, product_file_id), config)


def _cmd_file_groups(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _optional_release_id(client, args)
    if release_id is None:
        data = client.file_groups.list(args.product_slug)
    else:
        data = client.file_groups.list_for_release(args.product_slug, release_id)
    _print_output(data, config)


def _cmd_file_group(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    file_group_id = _file_group_id(client, args)
    _print_output(client.file_groups.get(args.product_slug, file_group_id), config)


def _cmd_delete_file_group(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    file_group_id = _file_group_id(client, args)
    _print_output(client.file_groups.delete(args.product_slug, file_group_id), config)


def _cmd_user_groups(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    if bool(args.product_slug) != bool(args.release_version):
        raise CliError("--product-slug and --release-version must be provided together")
    if args.product_slug:
        release = release_by_version(client, args.product_slug, args.release_version)
        data = client.user_groups.list_for_release(args.product_slug, release.id)
    else:
        data = client.user_groups.list()
    _print_output(data, config)


def _cmd_add_user_group(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _release_id(client, args)
    client.user_groups.add_to_release(args.product_slug, release_id, args.user_group_id)
    _print_output(
        {"status": "added", "user_group_id": args.user_group_id, "release_id": release_id},
        config,
    )


def _cmd_remove_user_group(config: ClientConfig, client: Client, args: argparse.Namespace) -> None:
    release_id = _release_id(client, args)
    client.user_groups.remove_from_release(args.product_slug, release_id, args.user_group_id)
    _print_output(
        {"status": "removed", "user_group_id": args.user_group_id, "release_id": release_id},
        config,
    )


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(args=argv)

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args)
    except (ValueError, FileNotFoundError) as exc:
        sys.stderr.write(f"Error: invalid configuration: {exc}\n")
        sys.exit(1)

    configure_logging(config)
    logger.debug("Loaded configuration", extra={"config": config.logging_dict()})

    try:
        with _build_client(config) as client:
            func: Handler = args.func
            func(config, client, args)
    except (CliError, PivnetError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        sys.exit(1)
    except httpx.RequestError as exc:
        sys.stderr.write(f"HTTP request failed: {exc}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()

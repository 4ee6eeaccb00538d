"""Command-line access to the organisation catalog.

Each subcommand runs one catalog query against GitHub and prints the result
as JSON on stdout. Configuration is read from the same environment
variables as the runtime.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import typing as typ

import msgspec

from .catalog import FetchResult, OrganisationCatalog
from .logging import configure_logging

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orgcatalog", description=__doc__)
    parser.add_argument(
        "--log-level", default="WARNING", help="femtologging level (default WARNING)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("repositories", help="List the filtered repositories")

    contributors = commands.add_parser(
        "contributors", help="List contributors across all repositories"
    )
    contributors.add_argument(
        "--repository",
        default=None,
        help="Only list the unfiltered contributors of this repository",
    )

    paths = commands.add_parser("paths", help="List every path in a repository")
    paths.add_argument("repository", help="Repository name (case-insensitive)")
    paths.add_argument(
        "--branch",
        default=None,
        help="Branch to list (default: the repository's default branch)",
    )
    return parser


async def _paths(
    catalog: OrganisationCatalog, repository: str, branch: str | None
) -> FetchResult[typ.Any]:
    if branch is None:
        found, match = await catalog.find_repository_by_name(repository)
        if not found or match is None:
            return FetchResult.failed()
        repository, branch = match.name, match.default_branch
    return await catalog.list_paths(repository, branch)


async def _run(
    args: argparse.Namespace,
    catalog_factory: cabc.Callable[[], OrganisationCatalog],
) -> FetchResult[typ.Any]:
    catalog = catalog_factory()
    try:
        match args.command:
            case "repositories":
                return await catalog.list_repositories()
            case "contributors" if args.repository is not None:
                return await catalog.list_contributors_for_repository(args.repository)
            case "contributors":
                return await catalog.list_all_contributors()
            case _:
                return await _paths(catalog, args.repository, args.branch)
    finally:
        await catalog.aclose()


def main(
    argv: list[str] | None = None,
    *,
    catalog_factory: cabc.Callable[[], OrganisationCatalog] | None = None,
) -> int:
    """Run one catalog query and print it as JSON.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.
    catalog_factory : Callable[[], OrganisationCatalog] | None, optional
        Builds the catalog to query; defaults to
        :meth:`OrganisationCatalog.from_env`.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the upstream query failed.

    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level, force=True)

    result = asyncio.run(_run(args, catalog_factory or OrganisationCatalog.from_env))
    if not result.is_successful:
        print(f"orgcatalog {args.command}: GitHub query failed", file=sys.stderr)
        return 1

    print(msgspec.json.encode(result.items).decode("utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

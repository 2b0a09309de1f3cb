# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kubesync.app import search_collection, sync_cluster_capabilities, sync_cluster_instances
from kubesync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync Kubernetes resources into a search index")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including client libraries",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    capabilities = subparsers.add_parser(
        "capabilities",
        help="Infer what each resource type does and index it",
    )
    capabilities.add_argument(
        "--dry-run",
        action="store_true",
        help="Discover and infer, but do not write to the index",
    )

    instances = subparsers.add_parser(
        "instances",
        help="Index live resource instances and purge deleted ones",
    )
    instances.add_argument(
        "--dry-run",
        action="store_true",
        help="Discover only; skip stale cleanup and storage",
    )
    instances.add_argument(
        "--resource-types",
        type=str,
        help="Comma-separated plural resource names to sync (e.g. deployments,services)",
    )

    search = subparsers.add_parser("search", help="Search a synced collection")
    search.add_argument("collection", type=str, help="Collection to search")
    search.add_argument("query", type=str, nargs="?", help="Natural language query")
    search.add_argument("--kind", type=str, help="Only match this kind (e.g. Deployment)")
    search.add_argument("--api-group", type=str, help="Only match this API group")
    search.add_argument("--namespace", type=str, help="Only match this namespace")
    search.add_argument(
        "-n",
        "--n-results",
        type=int,
        default=10,
        help="Maximum number of results (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _parse_resource_types(value: str | None) -> list[str] | None:
    if value is None:
        return None
    names = [name.strip() for name in value.split(",") if name.strip()]
    if not names:
        raise ValueError("--resource-types needs at least one resource name")
    return names


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    resource_types: list[str] | None = None
    try:
        if parsed_args.command == "instances":
            resource_types = _parse_resource_types(parsed_args.resource_types)
        if parsed_args.command == "search" and parsed_args.n_results < 1:
            raise ValueError("--n-results must be at least 1")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "capabilities":
            sync_cluster_capabilities(dry_run=parsed_args.dry_run)
        elif parsed_args.command == "instances":
            sync_cluster_instances(
                dry_run=parsed_args.dry_run,
                resource_types=resource_types,
            )
        elif parsed_args.command == "search":
            print(
                search_collection(
                    parsed_args.collection,
                    parsed_args.query,
                    kind=parsed_args.kind,
                    api_group=parsed_args.api_group,
                    namespace=parsed_args.namespace,
                    n_results=parsed_args.n_results,
                )
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()

"""Command-line interface.

Usage:
    marl [-r REGION]                      print the selected ARL
    marl [-r REGION] invalidate           drop the selected ARL from the cache
    marl regions                          list regions with a valid ARL
    marl [-r REGION] config streamrip [PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from marl import __version__
from marl.cache import CacheStore
from marl.config_patch import ConfigPatchError, patch_streamrip
from marl.directory import EmptyDirectoryError, NotFoundError, RecordDirectory
from marl.extraction.nodes import ParseError
from marl.pipeline.fetcher import DocumentClient, FetchError
from marl.service import open_directory
from marl.settings import Settings

logger = logging.getLogger("marl")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marl", description="Deezer ARL manager")
    parser.add_argument("-r", "--region", help="Region to select (default: first available)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser(
        "invalidate",
        help="Invalidate the current ARL in the stack (optionally, for a specific region)",
    )
    sub.add_parser("regions", help="List regions that currently have a valid ARL")

    config = sub.add_parser("config", help="Edit the configuration file for certain downloaders")
    downloaders = config.add_subparsers(dest="downloader", required=True)
    streamrip = downloaders.add_parser("streamrip", help="Set [deezer] arl in streamrip's config.toml")
    streamrip.add_argument("path", nargs="?", type=Path, help="Override the config path if necessary")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _dispatch(args: argparse.Namespace, directory: RecordDirectory, settings: Settings) -> None:
    if args.command == "invalidate":
        directory.invalidate(args.region)
    elif args.command == "regions":
        for region in directory.regions():
            print(region)
    elif args.command == "config":
        record = directory.get(args.region)
        patch_streamrip(args.path or settings.resolved_streamrip_config_path, record)
    else:
        print(directory.get(args.region).value)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    fetch_document: Callable[[], str] | None = None,
    now: datetime | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    settings = settings or Settings()
    logger.debug(f"Using cache {settings.cache_path}")
    store = CacheStore(settings.cache_path, now=now)

    if fetch_document is not None:
        return _run(args, settings, store, fetch_document)

    with DocumentClient(
        url=settings.remote_url,
        timeout_s=settings.timeout_s,
        max_retries=settings.max_retries,
        backoff_s=settings.backoff_s,
        user_agent=settings.user_agent,
    ) as client:
        return _run(args, settings, store, client.fetch_document)


def _run(
    args: argparse.Namespace,
    settings: Settings,
    store: CacheStore,
    fetch_document: Callable[[], str],
) -> int:
    try:
        snapshot, directory = open_directory(store, fetch_document)
    except (FetchError, ParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        _dispatch(args, directory, settings)
    except NotFoundError as e:
        print(f"error: no ARL for region '{e.region}'", file=sys.stderr)
        print("valid regions:", file=sys.stderr)
        for region in e.regions:
            print(f"  {region}", file=sys.stderr)
        return 1
    except (EmptyDirectoryError, ConfigPatchError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        store.persist(snapshot)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

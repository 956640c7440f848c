"""Crawlstore CLI entry points.
This module exposes commands for relaying images and saving listings.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from core.config import CrawlStoreConfig
from core.constants import EXIT_CODE_FAILURE, EXIT_CODE_SUCCESS
from core.deadline import Deadline
from core.errors import CrawlStoreError
from core.types import BatchWriteResult
from ingest.record_reader import read_pet_details, read_stores
from store.crawlstore_sdk import CrawlStoreClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="crawlstore", description="Crawl result persistence CLI")
    parser.add_argument("--image-bucket", help="Override CRAWLSTORE_IMAGE_BUCKET")
    parser.add_argument("--pet-table", help="Override CRAWLSTORE_PET_TABLE")
    parser.add_argument("--store-table", help="Override CRAWLSTORE_STORE_TABLE")
    parser.add_argument("--region", help="Override CRAWLSTORE_AWS_REGION")
    parser.add_argument(
        "--deadline",
        type=float,
        help="Abort the command after this many seconds",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_relay_image_command(subparsers)
    _add_save_pets_command(subparsers)
    _add_save_stores_command(subparsers)
    _add_save_store_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the crawlstore CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    deadline = Deadline.after(args.deadline) if args.deadline else None
    try:
        client = _build_client(args)
        if args.command == "relay-image":
            return _run_relay_image_command(client, args, deadline)
        if args.command == "save-pets":
            return _run_save_pets_command(client, args, deadline)
        if args.command == "save-stores":
            return _run_save_stores_command(client, args, deadline)
        if args.command == "save-store":
            return _run_save_store_command(client, args, deadline)
    except CrawlStoreError as error:
        print(f"error={error}")
        return EXIT_CODE_FAILURE
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> CrawlStoreClient:
    """Build SDK client with optional config overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = CrawlStoreConfig.from_env()
    overrides = {
        "image_bucket": args.image_bucket,
        "pet_table": args.pet_table,
        "store_table": args.store_table,
        "aws_region": args.region,
    }
    config = replace(config, **{name: value for name, value in overrides.items() if value})
    return CrawlStoreClient(config)


def _run_relay_image_command(
    client: CrawlStoreClient,
    args: argparse.Namespace,
    deadline: Deadline | None,
) -> int:
    """Handle relay-image command."""
    object_key = client.relay_image(args.url, args.file_name, deadline)
    print(object_key)
    return EXIT_CODE_SUCCESS


def _run_save_pets_command(
    client: CrawlStoreClient,
    args: argparse.Namespace,
    deadline: Deadline | None,
) -> int:
    """Handle save-pets command."""
    pets = read_pet_details(args.source)
    result = client.save_pet_details(pets, deadline)
    return _print_batch_result(result)


def _run_save_stores_command(
    client: CrawlStoreClient,
    args: argparse.Namespace,
    deadline: Deadline | None,
) -> int:
    """Handle save-stores command."""
    stores = read_stores(args.source)
    result = client.save_stores(stores, deadline)
    return _print_batch_result(result)


def _run_save_store_command(
    client: CrawlStoreClient,
    args: argparse.Namespace,
    deadline: Deadline | None,
) -> int:
    """Handle save-store command, one put_item per store."""
    stores = read_stores(args.source)
    for store in stores:
        client.save_store(store, deadline)
    print(f"saved={len(stores)}")
    return EXIT_CODE_SUCCESS


def _print_batch_result(result: BatchWriteResult) -> int:
    """Print batch summary; unprocessed items make the command fail."""
    print(f"table={result.table_name}")
    print(f"calls_issued={result.calls_issued}")
    print(f"items_submitted={result.items_submitted}")
    print(f"unprocessed_items={len(result.unprocessed_items)}")
    return EXIT_CODE_FAILURE if result.unprocessed_items else EXIT_CODE_SUCCESS


def _add_relay_image_command(subparsers: Any) -> None:
    """Register relay-image subcommand."""
    parser = subparsers.add_parser("relay-image", help="Download an image and upload it to S3")
    parser.add_argument("url", help="Source image URL")
    parser.add_argument("file_name", help="Target file name under images/")


def _add_save_pets_command(subparsers: Any) -> None:
    """Register save-pets subcommand."""
    parser = subparsers.add_parser("save-pets", help="Batch save pet listings from JSONL")
    parser.add_argument("source", help="Crawler JSONL file with pet listings")


def _add_save_stores_command(subparsers: Any) -> None:
    """Register save-stores subcommand."""
    parser = subparsers.add_parser("save-stores", help="Batch save store listings from JSONL")
    parser.add_argument("source", help="Crawler JSONL file with store listings")


def _add_save_store_command(subparsers: Any) -> None:
    """Register save-store subcommand."""
    parser = subparsers.add_parser(
        "save-store",
        help="Save store listings from JSONL with one put per store",
    )
    parser.add_argument("source", help="Crawler JSONL file with store listings")

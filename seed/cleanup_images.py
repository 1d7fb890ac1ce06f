#!/usr/bin/env python3
"""
Cleanup script to remove stored files via API endpoints.

Lists every record through the relay API, optionally narrows the set by
original name, and deletes each one (record and blob).

Run:
    python seed/cleanup_images.py \
      --api-id <API-ID> \
      --api-key <API-KEY> \
      --name-contains sample \
      --dry-run
"""

import argparse
from collections import Counter
import sys
from typing import Any

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")

IMAGES_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/v1/images"
REQUEST_TIMEOUT_SECONDS = 30


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete stored files via Image Relay API")

    parser.add_argument("--api-id", required=True, help="API Gateway ID (LocalStack)")
    parser.add_argument("--api-key", default=None, help="API key for x-api-key header")
    parser.add_argument(
        "--name-contains",
        default=None,
        help="Only delete files whose original name contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log what would be deleted without deleting it",
    )

    return parser.parse_args()


def select_records(records: list[dict[str, Any]], name_contains: str | None) -> list[dict[str, Any]]:
    if not name_contains:
        return records

    needle = name_contains.lower()
    return [record for record in records if needle in str(record.get("original_name", "")).lower()]


def delete_record(session: requests.Session, images_url: str, record_id: str) -> str:
    """Delete one record and classify the outcome for the summary."""
    response = session.delete(f"{images_url}/{record_id}", timeout=REQUEST_TIMEOUT_SECONDS)

    if not response.ok:
        logger.error(
            "Failed to delete image",
            extra={"image_id": record_id, "status": response.status_code, "response": response.text},
        )
        return "failed"

    if not response.json().get("blob_deleted"):
        logger.warning("Record deleted but blob was left behind", extra={"image_id": record_id})
        return "blob_orphaned"

    logger.info("Deleted image", extra={"image_id": record_id})
    return "deleted"


def cleanup_images() -> None:
    args = parse_args()
    images_url = IMAGES_API_URL.format(args.api_id)

    session = requests.Session()
    if args.api_key:
        session.headers["x-api-key"] = args.api_key

    logger.info(
        "Starting cleanup process",
        extra={"api_base_url": images_url, "name_contains": args.name_contains, "dry_run": args.dry_run},
    )

    try:
        listing = session.get(images_url, timeout=REQUEST_TIMEOUT_SECONDS)
        if not listing.ok:
            logger.error(
                "Failed to list images",
                extra={"status": listing.status_code, "response": listing.text},
            )
            sys.exit(1)

        targets = select_records(listing.json().get("images", []), args.name_contains)
        if not targets:
            logger.info("No images matched for cleanup")
            return

        if args.dry_run:
            for record in targets:
                logger.info(
                    "Would delete image",
                    extra={"image_id": record["id"], "original_name": record.get("original_name")},
                )
            return

        outcomes = Counter(delete_record(session, images_url, record["id"]) for record in targets)
        logger.info("Cleanup completed", extra={"outcomes": dict(outcomes), "matched": len(targets)})

        if outcomes["failed"]:
            sys.exit(1)

    except requests.RequestException as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    cleanup_images()

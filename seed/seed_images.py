#!/usr/bin/env python3
"""
Seed script to upload local files through the relay API.

Run:
    python seed/seed_images.py \
      --api-id <API-ID> \
      --api-key <API-KEY> \
      --images-dir ./samples
"""

import argparse
import base64
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")


IMAGES_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/v1/images"

SEED_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff", ".svg", ".pdf"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed files via Image Relay API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="Base API ID (e.g. LocalStack API Gateway ID)",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="API key for x-api-key header (optional for local)",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory holding the files to upload",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=4,
        help="Number of files to seed",
    )

    return parser.parse_args()


def collect_files(images_dir: Path, limit: int) -> list[Path]:
    files = sorted(
        path for path in images_dir.iterdir() if path.is_file() and path.suffix.lower() in SEED_SUFFIXES
    )
    return files[:limit]


def seed_images() -> None:
    try:
        args = parse_args()

        if not args.images_dir.is_dir():
            logger.error("Images directory not found", extra={"path": str(args.images_dir)})
            sys.exit(1)

        headers: dict[str, str] = {
            "Content-Type": "application/json",
        }
        if args.api_key:
            headers["x-api-key"] = args.api_key

        upload_url = IMAGES_API_URL.format(args.api_id)

        logger.info(
            "Starting seeding process",
            extra={"api_base_url": upload_url},
        )

        for image_path in collect_files(args.images_dir, args.limit):
            encoded_file = base64.b64encode(image_path.read_bytes()).decode("utf-8")

            payload: dict[str, Any] = {
                "file": encoded_file,
                "original_name": image_path.name,
            }

            response = requests.post(
                upload_url,
                headers=headers,
                json=payload,
                timeout=30,
            )

            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 201:
                logger.info(
                    "Seeded file",
                    extra={
                        "file": image_path.name,
                        "image_id": response_json.get("image_id"),
                        "cdn_url": response_json.get("cdn_url"),
                    },
                )
            else:
                logger.error(
                    "Failed to seed file",
                    extra={
                        "file": image_path.name,
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(upload_url, headers=headers, timeout=30)

        logger.info(
            "List images response",
            extra={
                "status": list_response.status_code,
                "total_count": list_response.json().get("total_count") if list_response.ok else None,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()

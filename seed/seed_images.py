#!/usr/bin/env python3
"""
Seed script that uploads local images to the source bucket, triggering the
versions function through the bucket notification.

Run:
    python seed/seed_images.py \
      --bucket <SOURCE-BUCKET> \
      --prefix photos \
      --endpoint-url http://localhost:4566
"""

import argparse
from pathlib import Path
import sys

from aws_lambda_powertools import Logger
import boto3

from core.utils.constants import IMAGE_TYPE_MAP, LOCALSTACK_URL
from core.utils.mime import mime_type_for

logger = Logger(service="seed")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upload sample images to the source bucket")

    parser.add_argument(
        "--bucket",
        required=True,
        help="Source bucket watched by the versions function",
    )
    parser.add_argument(
        "--prefix",
        default="photos",
        help="Key prefix (directory) to upload under",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory containing .jpg/.png files",
    )
    parser.add_argument(
        "--endpoint-url",
        default=LOCALSTACK_URL,
        help="S3 endpoint (LocalStack by default)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=4,
        help="Number of images to upload",
    )

    return parser.parse_args()


def collect_images(images_dir: Path, limit: int) -> list[Path]:
    """Return up to ``limit`` uploadable images, sorted by name."""
    files = sorted(
        path
        for path in images_dir.iterdir()
        if path.is_file() and path.suffix.lstrip(".") in IMAGE_TYPE_MAP
    )
    return files[:limit]


def seed_images() -> None:
    try:
        args = parse_args()

        if not args.images_dir.is_dir():
            logger.error("Images directory not found", extra={"path": str(args.images_dir)})
            sys.exit(1)

        s3 = boto3.client("s3", endpoint_url=args.endpoint_url)

        logger.info(
            "Starting seeding process",
            extra={"bucket": args.bucket, "prefix": args.prefix},
        )

        for image_path in collect_images(args.images_dir, args.limit):
            key = f"{args.prefix.strip('/')}/{image_path.name}"
            content_type = mime_type_for(image_path.suffix.lstrip("."))

            s3.put_object(
                Bucket=args.bucket,
                Key=key,
                Body=image_path.read_bytes(),
                ContentType=content_type,
            )
            logger.info("Seeded image", extra={"bucket": args.bucket, "key": key})

        logger.info("Seeding completed")

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()

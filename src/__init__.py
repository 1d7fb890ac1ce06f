"""Image Relay Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image relay and CDN service using AWS Lambda, S3 and a JSON metadata store"
)

__all__ = ["handlers", "core"]

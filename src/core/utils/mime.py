from collections.abc import Mapping

from core.utils.constants import (
    DOCUMENT_MIME_TYPES,
    FILE_TYPE_AUDIO,
    FILE_TYPE_DOCUMENT,
    FILE_TYPE_IMAGE,
    FILE_TYPE_OTHER,
    FILE_TYPE_VIDEO,
)

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"II*\x00": "image/tiff",
    b"MM\x00*": "image/tiff",
    b"BM": "image/bmp",
    b"%PDF-": "application/pdf",
}

SVG_SNIFF_WINDOW = 1024


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # RIFF is a container; only the WEBP form is an image
    if file_data.startswith(b"RIFF") and file_data[8:12] == b"WEBP":
        return "image/webp"

    head = file_data[:SVG_SNIFF_WINDOW].lstrip().lower()
    if head.startswith((b"<svg", b"<?xml")) and b"<svg" in head:
        return "image/svg+xml"

    raise ValueError("Unsupported or unknown file type")


def classify_file_type(mimetype: str) -> str:
    """Map a MIME type onto the coarse file type stored with each record."""
    base = mimetype.split(";", 1)[0].strip().lower()
    major = base.split("/", 1)[0]

    if major == "image":
        return FILE_TYPE_IMAGE
    if major == "video":
        return FILE_TYPE_VIDEO
    if major == "audio":
        return FILE_TYPE_AUDIO
    if major == "text" or base in DOCUMENT_MIME_TYPES:
        return FILE_TYPE_DOCUMENT

    return FILE_TYPE_OTHER

import pytest

from core.utils.mime import classify_file_type, detect_mime_type


def test_detect_jpeg() -> None:
    assert detect_mime_type(b"\xff\xd8\xff\xe0abc") == "image/jpeg"


def test_detect_png() -> None:
    assert detect_mime_type(b"\x89PNG\r\n\x1a\nxxx") == "image/png"


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"GIF89a....", "image/gif"),
        (b"GIF87a....", "image/gif"),
        (b"II*\x00rest", "image/tiff"),
        (b"MM\x00*rest", "image/tiff"),
        (b"BM\x00\x00", "image/bmp"),
        (b"%PDF-1.7\n", "application/pdf"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b'  <svg xmlns="http://www.w3.org/2000/svg"></svg>', "image/svg+xml"),
        (b'<?xml version="1.0"?><svg></svg>', "image/svg+xml"),
    ],
)
def test_detect_other_formats(data: bytes, expected: str) -> None:
    assert detect_mime_type(data) == expected


def test_riff_without_webp_is_unsupported() -> None:
    with pytest.raises(ValueError):
        detect_mime_type(b"RIFF\x00\x00\x00\x00WAVEfmt ")


def test_plain_xml_is_unsupported() -> None:
    with pytest.raises(ValueError):
        detect_mime_type(b'<?xml version="1.0"?><feed></feed>')


def test_unsupported_type() -> None:
    with pytest.raises(ValueError):
        detect_mime_type(b"random-bytes")


@pytest.mark.parametrize(
    "mimetype,expected",
    [
        ("image/png", "image"),
        ("IMAGE/JPEG", "image"),
        ("video/mp4", "video"),
        ("audio/mpeg", "audio"),
        ("text/plain; charset=utf-8", "document"),
        ("application/pdf", "document"),
        ("application/zip", "other"),
        ("", "other"),
    ],
)
def test_classify_file_type(mimetype: str, expected: str) -> None:
    assert classify_file_type(mimetype) == expected

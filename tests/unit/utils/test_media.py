"""Tests for image detection and download-and-encode utilities."""

import base64

import pytest

from mcp_linear.utils.media import (
    IMAGE_MAX_BYTES,
    fetch_and_encode_image,
    guess_image_mime_type,
    is_image_url,
)


def test_image_max_bytes_value() -> None:
    assert IMAGE_MAX_BYTES == 10 * 1024 * 1024


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://cdn.example.com/shot.png", True),
        ("https://cdn.example.com/shot.PNG", True),
        ("https://cdn.example.com/shot.png?v=2", True),
        ("https://cdn.example.com/photo.jpeg#top", True),
        ("uploads/diagram.svg", True),
        ("https://docs.example.com/spec.pdf", False),
        ("https://cdn.example.com/png", False),
        ("https://example.com/a.png/download", False),
        ("", False),
        (None, False),
    ],
    ids=[
        "png",
        "uppercase",
        "query-string",
        "fragment",
        "bare-path",
        "pdf",
        "no-extension",
        "extension-in-directory",
        "empty",
        "none",
    ],
)
def test_is_image_url(url: str | None, expected: bool) -> None:
    assert is_image_url(url) is expected


def test_guess_image_mime_type() -> None:
    assert guess_image_mime_type("https://cdn.example.com/a.jpg?x=1") == "image/jpeg"
    assert guess_image_mime_type("https://cdn.example.com/blob") == "image/png"


class TestFetchAndEncodeImage:
    """Tests for fetch_and_encode_image helper."""

    def test_success(self) -> None:
        raw = b"fake-png-bytes"

        encoded, mime, size = fetch_and_encode_image(
            lambda _url: raw, "https://example.com/img.png"
        )

        assert encoded == base64.b64encode(raw).decode("ascii")
        assert mime == "image/png"
        assert size == len(raw)

    def test_explicit_mime_type(self) -> None:
        _, mime, _ = fetch_and_encode_image(
            lambda _url: b"data", "https://example.com/file", mime_type="image/webp"
        )
        assert mime == "image/webp"

    def test_oversized(self) -> None:
        encoded, mime, size = fetch_and_encode_image(
            lambda _url: b"x" * 200, "https://example.com/img.png", max_bytes=100
        )
        assert (encoded, mime, size) == (None, None, 200)

    def test_size_at_limit_passes(self) -> None:
        encoded, _, size = fetch_and_encode_image(
            lambda _url: b"x" * 100, "https://example.com/img.png", max_bytes=100
        )
        assert encoded is not None
        assert size == 100

    def test_fetch_returns_none(self) -> None:
        assert fetch_and_encode_image(
            lambda _url: None, "https://example.com/img.png"
        ) == (None, None, 0)

    def test_fetch_raises_exception(self) -> None:
        def boom(_url: str) -> bytes | None:
            raise ConnectionError("network down")

        assert fetch_and_encode_image(boom, "https://example.com/img.png") == (
            None,
            None,
            0,
        )

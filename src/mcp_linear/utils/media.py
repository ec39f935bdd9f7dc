"""Image detection and download-and-encode utilities."""

import base64
import logging
import mimetypes
from collections.abc import Callable
from urllib.parse import urlparse

logger = logging.getLogger("mcp-linear.utils.media")

# Maximum image size for inline encoding (10 MB).
IMAGE_MAX_BYTES: int = 10 * 1024 * 1024

IMAGE_EXTENSIONS = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp"}
)


def _url_path(url: str) -> str:
    return urlparse(url).path if "://" in url else url.split("?", 1)[0]


def is_image_url(url: str | None) -> bool:
    """Decide whether a URL points at an image, judging by its file extension.

    Query strings and fragments are ignored, the match is case-insensitive.

    Args:
        url: The URL (or bare path) to inspect.

    Returns:
        True if the path ends with a known image extension.
    """
    if not url:
        return False
    path = _url_path(url).lower()
    if "." not in path.rsplit("/", 1)[-1]:
        return False
    return "." + path.rsplit(".", 1)[-1] in IMAGE_EXTENSIONS


def guess_image_mime_type(url: str) -> str:
    """Guess the MIME type of an image URL, defaulting to ``image/png``."""
    return mimetypes.guess_type(_url_path(url))[0] or "image/png"


def fetch_and_encode_image(
    fetch_fn: Callable[[str], bytes | None],
    url: str,
    mime_type: str | None = None,
    max_bytes: int = IMAGE_MAX_BYTES,
) -> tuple[str | None, str | None, int]:
    """Fetch and base64-encode an image.

    Args:
        fetch_fn: Callable that takes a URL and returns raw bytes,
            or None on failure.
        url: The URL to fetch the image from.
        mime_type: Explicit MIME type. When None the type is guessed
            from the URL path.
        max_bytes: Maximum allowed image size in bytes.

    Returns:
        A 3-tuple ``(base64_data, resolved_mime_type, fetched_bytes)``.

        On failure the first two are ``None`` and *fetched_bytes* tells
        the failure mode apart:

        * ``fetched_bytes == 0`` -- fetch returned ``None`` or raised.
        * ``fetched_bytes > 0``  -- the image exceeded *max_bytes*.
    """
    try:
        data_bytes = fetch_fn(url)
    except Exception:
        logger.warning("Failed to fetch image from %s", url, exc_info=True)
        return None, None, 0

    if data_bytes is None:
        logger.warning("Fetch returned None for image %s", url)
        return None, None, 0

    actual_size = len(data_bytes)
    if actual_size > max_bytes:
        logger.warning(
            "Image %s fetched size %d exceeds limit %d", url, actual_size, max_bytes
        )
        return None, None, actual_size

    encoded = base64.b64encode(data_bytes).decode("ascii")
    return encoded, mime_type or guess_image_mime_type(url), actual_size

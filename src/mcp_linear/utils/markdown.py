"""Markdown image scanning and pluggable image analysis."""

import logging
import re
from collections.abc import Callable, Iterable

from .media import fetch_and_encode_image

logger = logging.getLogger("mcp-linear.utils.markdown")

# ![alt](url) or ![alt](url "title"); angle-bracketed URLs are unwrapped and
# the URL may hold one level of balanced parentheses.
MARKDOWN_IMAGE_PATTERN = re.compile(
    r"!\[(?P<alt>[^\]]*)\]\(\s*<?"
    r"(?P<url>(?:[^\s()<>]|\([^\s()]*\))+)"
    r">?(?:\s+[\"'][^\"']*[\"'])?\s*\)"
)

PLACEHOLDER_ANALYSIS = "Image analysis is not available; open the URL to inspect it."

ImageAnalyzer = Callable[[str], str]


def extract_image_references(text: str | None) -> list[str]:
    """Return the URLs of all markdown images in ``text``, in source order."""
    if not text:
        return []
    return [match.group("url") for match in MARKDOWN_IMAGE_PATTERN.finditer(text)]


def placeholder_analyzer(url: str) -> str:
    return PLACEHOLDER_ANALYSIS


class EncodingImageAnalyzer:
    """Analyzer that downloads the image and hands it back as a data URI.

    This is not content analysis; it lets the host model inspect the
    bytes itself. Download failures degrade to a message, never an error.
    """

    def __init__(
        self, fetch_fn: Callable[[str], bytes | None], max_bytes: int | None = None
    ) -> None:
        self.fetch_fn = fetch_fn
        self.max_bytes = max_bytes

    def __call__(self, url: str) -> str:
        kwargs = {"max_bytes": self.max_bytes} if self.max_bytes is not None else {}
        encoded, mime_type, size = fetch_and_encode_image(self.fetch_fn, url, **kwargs)
        if encoded is None:
            if size:
                return f"Image unavailable: {size} bytes exceeds the inline limit."
            return "Image unavailable: download failed."
        return f"data:{mime_type};base64,{encoded}"


def analyze_images(
    urls: Iterable[str], analyzer: ImageAnalyzer | None = None
) -> list[dict[str, str]]:
    """Pair every URL with its analysis, preserving order."""
    analyze = analyzer or placeholder_analyzer
    return [{"url": url, "analysis": analyze(url)} for url in urls]


def scan_markdown_images(
    text: str | None, analyzer: ImageAnalyzer | None = None
) -> list[dict[str, str]]:
    """Find markdown images in ``text`` and return ``{url, analysis}`` pairs."""
    urls = extract_image_references(text)
    if urls:
        logger.debug(f"Found {len(urls)} markdown image(s)")
    return analyze_images(urls, analyzer)

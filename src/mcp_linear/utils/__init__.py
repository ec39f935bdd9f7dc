"""
Utility functions for the MCP Linear integration.
"""

from .io import is_read_only_mode
from .logging import log_config_param, mask_sensitive
from .markdown import extract_image_references, scan_markdown_images
from .media import is_image_url

__all__ = [
    "extract_image_references",
    "is_image_url",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "scan_markdown_images",
]

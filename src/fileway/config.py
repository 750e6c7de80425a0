# SPDX-License-Identifier: MIT
"""Configuration management for the fileway driver layer.

This module handles:
- Logging setup
- Process-wide listing configuration (hidden-name markers, extension table)
"""

import logging
import os
import sys
from functools import lru_cache
from types import MappingProxyType

from .listing import ListingConfig
from .models import FileType

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("fileway")


# ---------- Extension classification ----------
_TYPE_EXTENSIONS: dict[FileType, tuple[str, ...]] = {
    FileType.OFFICE: ("doc", "docx", "xls", "xlsx", "ppt", "pptx", "pdf"),
    FileType.VIDEO: ("mp4", "mkv", "avi", "mov", "rmvb", "webm", "flv"),
    FileType.AUDIO: ("mp3", "flac", "ogg", "m4a", "wav"),
    FileType.TEXT: (
        "txt", "htm", "html", "xml", "java", "properties", "sql", "js", "md", "json", "conf", "ini",
        "vue", "php", "py", "bat", "gitignore", "yml", "go", "sh", "c", "cpp", "h", "hpp",
    ),  # fmt: skip
    FileType.IMAGE: ("jpg", "tiff", "jpeg", "png", "gif", "bmp", "svg", "ico", "swf", "webp"),
}

DEFAULT_HIDDEN_PREFIXES = (".",)


def _parse_hidden_prefixes(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of hidden-name markers.

    Blank entries are ignored; an unset or blank value yields the default.
    """
    if raw is None or not raw.strip():
        return DEFAULT_HIDDEN_PREFIXES
    prefixes = tuple(p.strip() for p in raw.split(",") if p.strip())
    return prefixes or DEFAULT_HIDDEN_PREFIXES


@lru_cache(maxsize=1)
def get_listing_config() -> ListingConfig:
    """Build the process-wide listing configuration (cached).

    Configuration
    -------------
    ``FILEWAY_HIDDEN_PREFIXES``
        Comma-separated name prefixes that mark an entry as hidden
        (default ``"."``).
    """
    hidden = _parse_hidden_prefixes(os.getenv("FILEWAY_HIDDEN_PREFIXES"))
    table = {ext: file_type for file_type, exts in _TYPE_EXTENSIONS.items() for ext in exts}
    logger.debug("Listing config: hidden=%s, %d known extensions", hidden, len(table))
    return ListingConfig(hidden_prefixes=hidden, type_table=MappingProxyType(table))

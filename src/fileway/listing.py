# SPDX-License-Identifier: MIT
"""Listing and sort engine.

Turns a raw, unordered set of directory entries into the list a caller sees:
hidden entries dropped, each entry classified, and the result ordered by the
account's configured key and direction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

from .models import File, FileType, OrderBy, OrderDirection

_EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ListingConfig:
    """Read-only listing rules, loaded once per process and injected into drivers."""

    hidden_prefixes: tuple[str, ...] = (".",)
    type_table: Mapping[str, FileType] = field(default_factory=lambda: MappingProxyType({}))


def is_hidden(name: str, config: ListingConfig) -> bool:
    return any(name.startswith(prefix) for prefix in config.hidden_prefixes)


def extension(name: str) -> str:
    """Lowercased extension without the dot, or "" if there is none.

    Dotfiles such as ``.gitignore`` use the text after the dot.
    """
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def classify(name: str, is_dir: bool, config: ListingConfig) -> FileType:
    """Classify an entry as a folder or by its extension."""
    if is_dir:
        return FileType.FOLDER
    return config.type_table.get(extension(name), FileType.UNKNOWN)


def filter_hidden(files: Iterable[File], config: ListingConfig) -> list[File]:
    return [f for f in files if not is_hidden(f.name, config)]


def _sort_key(order_by: OrderBy):
    if order_by == "size":
        return lambda f: f.size
    if order_by == "updated_at":
        return lambda f: f.updated_at if f.updated_at is not None else _EPOCH_MIN
    return lambda f: f.name


def sort_files(files: Iterable[File], order_by: OrderBy = "", order_direction: OrderDirection = "") -> list[File]:
    """Order files by the given key and direction.

    An empty ``order_by`` means name, an empty direction means ascending.
    Equal keys always fall back to name ascending, whichever the direction,
    so reversing the direction reverses the order exactly when there are no
    ties. Timestamps that are unknown sort as the earliest.

    Args:
        files: Entries to order (not modified).
        order_by: ``"name"``, ``"size"``, ``"updated_at"`` or ``""``.
        order_direction: ``"ASC"``, ``"DESC"`` or ``""``.

    Returns:
        A new, ordered list.
    """
    # Two stable passes: name ascending, then the key. Python's sort keeps
    # equal elements in their prior order even with reverse=True.
    result = sorted(files, key=lambda f: f.name)
    if order_by in ("", "name"):
        if order_direction == "DESC":
            result.reverse()
        return result
    result.sort(key=_sort_key(order_by), reverse=order_direction == "DESC")
    return result

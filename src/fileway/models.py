# SPDX-License-Identifier: MIT
"""Canonical entities shared by all drivers.

``Account`` is the persisted configuration of one backend instance. ``File``
is the transient metadata produced by stat/list calls. ``FileStream`` is the
payload of an upload.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from datetime import datetime, timezone
from enum import IntEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

logger = logging.getLogger("fileway")

OrderBy = Literal["", "name", "size", "updated_at"]
OrderDirection = Literal["", "ASC", "DESC"]


class FileType(IntEnum):
    """Content classification of a listed entry."""

    UNKNOWN = 0
    FOLDER = 1
    OFFICE = 2
    VIDEO = 3
    AUDIO = 4
    TEXT = 5
    IMAGE = 6


class Account(BaseModel):
    """A configured backend instance.

    Only a driver's ``save`` changes ``status`` and ``proxy``; browse and read
    operations treat the account as read-only.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str
    type: str
    index: int = 0
    root_folder: str = ""
    order_by: OrderBy = ""
    order_direction: OrderDirection = ""
    proxy: bool = False
    status: str = ""
    updated_at: datetime | None = None


class File(BaseModel, frozen=True):
    """Metadata for a single filesystem entry."""

    name: str
    size: int = 0
    type: FileType = FileType.UNKNOWN
    updated_at: datetime | None = None
    driver: str = ""

    @field_validator("updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Naive timestamps are taken as UTC so listings always compare.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_dir(self) -> bool:
        return self.type == FileType.FOLDER


class Resolved(BaseModel, frozen=True):
    """Result of resolving a path.

    ``children`` is populated exactly when ``file`` is a folder.
    """

    file: File
    children: list[File] | None = None

    @model_validator(mode="after")
    def _children_match_kind(self) -> Resolved:
        if (self.children is not None) != self.file.is_dir:
            raise ValueError("children must be set exactly when file is a folder")
        return self

    @property
    def is_folder(self) -> bool:
        return self.children is not None


class FileStream:
    """A named byte stream to be written under ``path/name``.

    The caller owns the stream until it is handed to a driver's ``upload``;
    from then on the driver drains and closes it on every exit path.

    Args:
        name: Target file name.
        path: Target folder, relative to the account root ("" for the root).
        chunks: Async iterator producing the content.
        size: Declared content length, if known.
        mime_type: Declared content type, if known.
    """

    def __init__(
        self,
        name: str,
        path: str,
        chunks: AsyncIterator[bytes],
        *,
        size: int | None = None,
        mime_type: str | None = None,
    ) -> None:
        self.name = name
        self.path = path
        self.size = size
        self.mime_type = mime_type
        self._chunks = chunks
        self._closed = False

    @classmethod
    def from_bytes(cls, name: str, path: str, data: bytes, *, mime_type: str | None = None) -> FileStream:
        """Wrap an in-memory payload."""
        return cls(name, path, _iter_chunks([data]), size=len(data), mime_type=mime_type)

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[bytes]:
        if self._closed:
            raise ValueError(f"Stream already closed: {self.name}")
        async for chunk in self._chunks:
            yield chunk

    async def aclose(self) -> None:
        """Drain any unread content and release the underlying iterator."""
        if self._closed:
            return
        self._closed = True
        try:
            async for _ in self._chunks:
                pass
        except Exception:
            logger.warning("Error draining stream %s", self.name, exc_info=True)
        finally:
            aclose = getattr(self._chunks, "aclose", None)
            if aclose is not None:
                await aclose()


async def _iter_chunks(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk

# SPDX-License-Identifier: MIT
"""File tools: browse, link, and mutate paths within an account.

Every tool loads the named account from the configured store, dispatches to
the driver registered for the account's type, and returns JSON-ready dicts.
Driver errors propagate unchanged.
"""

import base64
import binascii
from typing import TypedDict

from ..accounts import get_account_store
from ..config import logger
from ..drivers import Driver, get_driver
from ..models import Account, File, FileStream


class FileResult(TypedDict):
    """One file or folder."""

    name: str
    size: int
    type: str  # "folder", "text", "image", ...
    is_dir: bool
    updated_at: str | None  # ISO 8601
    driver: str


class ResolveResult(TypedDict):
    """Result from resolve tool."""

    file: FileResult
    children: list[FileResult] | None


class LinkResult(TypedDict):
    """Result from get_link tool."""

    path: str
    link: str
    proxy: bool


class ActionResult(TypedDict):
    """Result from mutating tools."""

    success: bool
    message: str


def _file_result(file: File) -> FileResult:
    return FileResult(
        name=file.name,
        size=file.size,
        type=file.type.name.lower(),
        is_dir=file.is_dir,
        updated_at=file.updated_at.isoformat() if file.updated_at else None,
        driver=file.driver,
    )


async def _open(account_name: str) -> tuple[Account, Driver]:
    account = await get_account_store().load(account_name)
    return account, get_driver(account.type)


async def stat(account: str, path: str = "") -> FileResult:
    """Describe the node at *path*."""
    acc, driver = await _open(account)
    return _file_result(await driver.stat(path, acc))


async def list_folder(account: str, path: str = "") -> list[FileResult]:
    """List the visible children of the folder at *path*, in account order."""
    acc, driver = await _open(account)
    return [_file_result(f) for f in await driver.list(path, acc)]


async def resolve(account: str, path: str = "") -> ResolveResult:
    """Describe *path*, including its children when it is a folder."""
    acc, driver = await _open(account)
    resolved = await driver.resolve(path, acc)
    children = [_file_result(f) for f in resolved.children] if resolved.children is not None else None
    return ResolveResult(file=_file_result(resolved.file), children=children)


async def get_link(account: str, path: str) -> LinkResult:
    """Return the direct location of a file and whether it must be proxied."""
    acc, driver = await _open(account)
    link = await driver.direct_link(path, acc)
    return LinkResult(path=path, link=link, proxy=acc.proxy)


async def make_folder(account: str, path: str) -> ActionResult:
    acc, driver = await _open(account)
    await driver.make_folder(path, acc)
    logger.info("make_folder: %s:%s", account, path)
    return ActionResult(success=True, message=f"Created folder {path}")


async def move(account: str, src: str, dst: str) -> ActionResult:
    acc, driver = await _open(account)
    await driver.move(src, dst, acc)
    logger.info("move: %s:%s -> %s", account, src, dst)
    return ActionResult(success=True, message=f"Moved {src} to {dst}")


async def copy(account: str, src: str, dst: str) -> ActionResult:
    acc, driver = await _open(account)
    await driver.copy(src, dst, acc)
    logger.info("copy: %s:%s -> %s", account, src, dst)
    return ActionResult(success=True, message=f"Copied {src} to {dst}")


async def delete(account: str, path: str) -> ActionResult:
    acc, driver = await _open(account)
    await driver.delete(path, acc)
    logger.info("delete: %s:%s", account, path)
    return ActionResult(success=True, message=f"Deleted {path}")


async def upload(account: str, path: str, name: str, content_base64: str) -> ActionResult:
    """Write base64-encoded content to ``path/name``.

    Raises:
        ValueError: If content_base64 is not valid base64
        ConflictError: If the target already exists
    """
    try:
        data = base64.b64decode(content_base64, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 content: {e}") from e

    acc, driver = await _open(account)
    await driver.upload(FileStream.from_bytes(name, path, data), acc)
    logger.info("upload: %s:%s/%s (%d bytes)", account, path, name, len(data))
    return ActionResult(success=True, message=f"Uploaded {name} ({len(data)} bytes)")

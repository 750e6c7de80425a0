# SPDX-License-Identifier: MIT
"""Local filesystem driver.

Reference implementation of the :class:`~fileway.drivers.protocol.Driver`
contract. Blocking filesystem calls run in worker threads; uploads are
written with ``aiofiles``.
"""

from __future__ import annotations

import errno
import logging
import os
import pathlib
import shutil
import stat as stat_module
from datetime import datetime, timezone
from functools import partial
from typing import TYPE_CHECKING, Any

import aiofiles
import anyio

from ..config import get_listing_config
from ..exceptions import (
    ConfigInvalidError,
    ConflictError,
    DriveError,
    IOFailureError,
    NotFoundError,
    NotSupportedError,
    PathTraversalError,
)
from ..listing import ListingConfig, classify, filter_hidden, sort_files
from ..models import Account, File, FileStream, Resolved
from ..security import check_root, join_path, normalize_path, validate_safe_path
from .protocol import ConfigItem, DriverConfig

if TYPE_CHECKING:
    from ..accounts import AccountStore

logger = logging.getLogger("fileway")


def _translate(e: OSError, path: str) -> DriveError:
    """Map an ``OSError`` onto the driver error taxonomy."""
    if isinstance(e, (FileNotFoundError, NotADirectoryError)) or e.errno == errno.ELOOP:
        return NotFoundError(f"File not found: {path}")
    return IOFailureError(f"I/O error on '{path}': {e}", cause=e)


def _unresolvable(e: OSError) -> bool:
    """A dangling or looping link."""
    return isinstance(e, FileNotFoundError) or e.errno == errno.ELOOP


def _lexists(path: pathlib.Path) -> bool:
    return path.exists() or path.is_symlink()


def _is_within(path: pathlib.Path, ancestor: pathlib.Path) -> bool:
    return path == ancestor or ancestor in path.parents


class LocalDriver:
    """Driver serving a folder on the local disk.

    Args:
        listing_config: Hidden-name and extension rules. Defaults to the
            process-wide :func:`~fileway.config.get_listing_config`.
    """

    def __init__(self, listing_config: ListingConfig | None = None) -> None:
        self._listing = listing_config or get_listing_config()

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def describe(self) -> DriverConfig:
        return DriverConfig(name="Local", only_proxy=True)

    def declare_options(self) -> list[ConfigItem]:
        return [
            ConfigItem(name="root_folder", label="root folder path", type="string", required=True),
            ConfigItem(name="order_by", label="order_by", type="select", values=("name", "size", "updated_at")),
            ConfigItem(name="order_direction", label="order_direction", type="select", values=("ASC", "DESC")),
        ]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def save(self, account: Account, old: Account | None, store: AccountStore) -> None:
        logger.debug("save account: [%s]", account.name)
        if old is not None and old.root_folder != account.root_folder:
            logger.info("Account [%s] root changed: %s -> %s", account.name, old.root_folder, account.root_folder)
        try:
            await anyio.to_thread.run_sync(check_root, account.root_folder)
        except ConfigInvalidError as e:
            account.status = str(e)
            await store.save(account)
            raise
        account.status = "work"
        if self.describe().only_proxy:
            account.proxy = True
        await store.save(account)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _root(self, account: Account) -> pathlib.Path:
        if not account.root_folder.strip():
            raise ConfigInvalidError(f"Account [{account.name}] has no root folder")
        return pathlib.Path(account.root_folder.strip()).expanduser()

    def _safe(self, account: Account, path: str, *, allow_create: bool = False) -> pathlib.Path:
        return validate_safe_path(self._root(account), path, allow_create=allow_create)

    async def _path(self, account: Account, path: str, *, allow_create: bool = False) -> pathlib.Path:
        return await anyio.to_thread.run_sync(partial(self._safe, account, path, allow_create=allow_create))

    def _to_file(self, name: str, st: os.stat_result) -> File:
        is_dir = stat_module.S_ISDIR(st.st_mode)
        return File(
            name=name,
            size=0 if is_dir else st.st_size,
            type=classify(name, is_dir, self._listing),
            updated_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            driver=self.describe().name,
        )

    def _scan(self, folder: pathlib.Path, base: pathlib.Path) -> list[File]:
        root = pathlib.Path(os.path.realpath(base))
        files: list[File] = []
        with os.scandir(folder) as it:
            for entry in it:
                try:
                    if entry.is_symlink():
                        target = pathlib.Path(os.path.realpath(entry.path))
                        if not _is_within(target, root):
                            logger.debug("Skipping link outside root: %s", entry.path)
                            continue
                    st = entry.stat()
                except OSError as e:
                    if not _unresolvable(e):
                        raise
                    logger.debug("Skipping unresolvable entry: %s (%s)", entry.path, e)
                    continue
                files.append(self._to_file(entry.name, st))
        return files

    def _placement(self, src_full: pathlib.Path, dst: str, account: Account) -> pathlib.Path:
        """Where *src_full* lands for a copy or move to *dst*.

        An existing folder at *dst* receives the source under its own name;
        anything already at the final target is never overwritten.
        """
        dst_full = self._safe(account, dst, allow_create=True)
        if dst_full.is_dir():
            dst_full = dst_full / src_full.name
        if _lexists(dst_full):
            raise NotSupportedError(f"Destination already exists: {dst}")
        if src_full.is_dir() and _is_within(dst_full, src_full):
            raise NotSupportedError(f"Cannot place a folder inside itself: {dst}")
        return dst_full

    # ------------------------------------------------------------------
    # Metadata / listing
    # ------------------------------------------------------------------

    async def stat(self, path: str, account: Account) -> File:
        full = await self._path(account, path)
        try:
            st = await anyio.to_thread.run_sync(full.stat)
        except OSError as e:
            raise _translate(e, path) from e
        return self._to_file(full.name, st)

    async def list(self, path: str, account: Account) -> list[File]:
        logger.debug("local list: %s", path)
        full = await self._path(account, path)
        try:
            files = await anyio.to_thread.run_sync(self._scan, full, self._root(account))
        except OSError as e:
            raise _translate(e, path) from e
        return sort_files(filter_hidden(files, self._listing), account.order_by, account.order_direction)

    async def resolve(self, path: str, account: Account) -> Resolved:
        file = await self.stat(path, account)
        if not file.is_dir:
            return Resolved(file=file)
        return Resolved(file=file, children=await self.list(path, account))

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def direct_link(self, path: str, account: Account) -> str:
        if (await self.stat(path, account)).is_dir:
            raise NotSupportedError(f"cannot link a folder: {path}")
        return str(await self._path(account, path))

    async def stream_proxy(self, request: Any, account: Account) -> None:
        # Content is always served from the path returned by direct_link.
        return None

    async def preview(self, path: str, account: Account) -> Any:
        raise NotSupportedError(f"{self.describe().name} driver has no preview")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    async def make_folder(self, path: str, account: Account) -> None:
        full = await self._path(account, path, allow_create=True)
        try:
            await anyio.to_thread.run_sync(partial(full.mkdir, parents=True, exist_ok=True))
        except OSError as e:
            raise IOFailureError(f"Cannot create folder '{path}': {e}", cause=e) from e

    async def move(self, src: str, dst: str, account: Account) -> None:
        if not normalize_path(src):
            raise NotSupportedError("Cannot move the root folder")
        src_full = await self._path(account, src)
        dst_full = await anyio.to_thread.run_sync(self._placement, src_full, dst, account)
        logger.debug("local move: %s -> %s", src_full, dst_full)
        try:
            await anyio.to_thread.run_sync(shutil.move, src_full, dst_full)
        except OSError as e:
            raise _translate(e, dst) from e

    async def copy(self, src: str, dst: str, account: Account) -> None:
        if not normalize_path(src):
            raise NotSupportedError("Cannot copy the root folder")
        src_full = await self._path(account, src)
        dst_full = await anyio.to_thread.run_sync(self._placement, src_full, dst, account)
        logger.debug("local copy: %s -> %s", src_full, dst_full)
        try:
            await anyio.to_thread.run_sync(_copy_node, src_full, dst_full)
        except OSError as e:
            raise _translate(e, dst) from e

    async def delete(self, path: str, account: Account) -> None:
        if not normalize_path(path):
            raise NotSupportedError("Cannot delete the root folder")
        full = await self._path(account, path)
        try:
            await anyio.to_thread.run_sync(_remove_node, full)
        except OSError as e:
            raise _translate(e, path) from e

    async def upload(self, stream: FileStream, account: Account) -> None:
        try:
            if not stream.name or "/" in stream.name or stream.name in (".", ".."):
                raise PathTraversalError(f"Invalid file name: {stream.name!r}")
            rel = join_path(stream.path, stream.name)
            target = await self._path(account, rel, allow_create=True)
            if await anyio.to_thread.run_sync(_lexists, target):
                raise ConflictError(f"File already exists: {rel}")
            try:
                await anyio.to_thread.run_sync(partial(target.parent.mkdir, parents=True, exist_ok=True))
            except OSError as e:
                raise IOFailureError(f"Cannot create folder for '{rel}': {e}", cause=e) from e
            await self._write(target, stream, rel)
            logger.debug("local upload: %s (%s bytes)", rel, stream.size)
        finally:
            await stream.aclose()

    async def _write(self, target: pathlib.Path, stream: FileStream, rel: str) -> None:
        created = False
        try:
            # "x" refuses to clobber a file created since the existence check.
            async with aiofiles.open(target, "xb") as f:
                created = True
                async for chunk in stream:
                    await f.write(chunk)
        except BaseException as e:
            if created:
                with anyio.CancelScope(shield=True):
                    await anyio.to_thread.run_sync(partial(target.unlink, missing_ok=True))
            if isinstance(e, FileExistsError) and not created:
                raise ConflictError(f"File already exists: {rel}") from e
            if isinstance(e, Exception):
                raise IOFailureError(f"Cannot write '{rel}': {e}", cause=e) from e
            raise


def _copy_node(src: pathlib.Path, dst: pathlib.Path) -> None:
    if src.is_dir():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst)


def _remove_node(path: pathlib.Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()

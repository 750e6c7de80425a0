# SPDX-License-Identifier: MIT
"""Path resolution with root containment.

Every caller-supplied path is treated as relative to an account root, even
when it starts with ``/``. Paths are normalized lexically first and then
checked against the resolved root, so neither ``..`` segments nor symlinks
can address anything outside it.
"""

from __future__ import annotations

import os
import pathlib
import posixpath

from .exceptions import ConfigInvalidError, NotFoundError, PathTraversalError


def normalize_path(path: str) -> str:
    """Normalize a root-relative path.

    Returns:
        The normalized path without leading or trailing slashes, or ``""``
        for the root.

    Raises:
        PathTraversalError: If the path climbs above the root.
    """
    stripped = path.strip().lstrip("/")
    if not stripped:
        return ""
    normalized = posixpath.normpath(stripped)
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../"):
        raise PathTraversalError(f"Invalid path '{path}': path traversal detected")
    return normalized


def join_path(*parts: str) -> str:
    """Join root-relative path segments and normalize the result."""
    return normalize_path("/".join(p.strip("/") for p in parts if p.strip("/")))


def split_path(path: str) -> tuple[str, str]:
    """Split a root-relative path into ``(parent, name)``.

    The root splits into ``("", "")``.
    """
    return posixpath.split(normalize_path(path))


def _realpath(path: pathlib.Path) -> pathlib.Path:
    """Resolve symlinks without raising on loops.

    A looping component is left unresolved; any later access to it fails
    with ``ELOOP``, which drivers report as not found.
    """
    return pathlib.Path(os.path.realpath(path))


def _contained(path: pathlib.Path, base: pathlib.Path) -> bool:
    try:
        path.relative_to(base)
    except ValueError:
        return False
    return True


def validate_safe_path(base: pathlib.Path, path: str, *, allow_create: bool = False) -> pathlib.Path:
    """Join *path* to *base* and confine the result to *base*.

    The parent directory is fully resolved while the final component is kept
    as-is, so the returned path addresses a symlink itself rather than its
    target. A final component that is a symlink must still point inside
    *base*.

    Args:
        base: Account root.
        path: Caller-supplied root-relative path.
        allow_create: Allow a path that does not exist yet.

    Returns:
        Absolute path inside the resolved *base*.

    Raises:
        PathTraversalError: If the path escapes *base*.
        NotFoundError: If the path does not exist and ``allow_create`` is False.
    """
    root = _realpath(base)
    rel = normalize_path(path)
    if not rel:
        target = root
    else:
        parent, name = posixpath.split(rel)
        parent_path = _realpath(root / parent) if parent else root
        if not _contained(parent_path, root):
            raise PathTraversalError(f"Invalid path '{path}': path traversal detected")
        target = parent_path / name
        if target.is_symlink() and not _contained(_realpath(target), root):
            raise PathTraversalError(f"Invalid path '{path}': path traversal detected")

    if not allow_create and not (target.exists() or target.is_symlink()):
        raise NotFoundError(f"File not found: {path}")
    return target


def check_root(root_folder: str) -> pathlib.Path:
    """Validate an account root folder.

    Returns:
        The resolved absolute root.

    Raises:
        ConfigInvalidError: If the root is empty, missing, or not a directory.
    """
    if not root_folder or not root_folder.strip():
        raise ConfigInvalidError("root folder is required")
    try:
        root = pathlib.Path(root_folder.strip()).expanduser().resolve()
    except (ValueError, OSError, RuntimeError) as e:
        raise ConfigInvalidError(f"[{root_folder}] invalid: {e}") from e
    if not root.exists():
        raise ConfigInvalidError(f"[{root_folder}] not exist")
    if not root.is_dir():
        raise ConfigInvalidError(f"[{root_folder}] is not a directory")
    return root

# SPDX-License-Identifier: MIT
"""Error taxonomy shared by every storage driver.

Drivers translate backend failures into these types at their boundary so a
caller sees the same error for "path does not exist" whether it came from a
local disk or a remote API.
"""

from __future__ import annotations


class DriveError(Exception):
    """Base class for all driver errors."""


class NotFoundError(DriveError):
    """The requested path (or account) does not resolve."""


class NotSupportedError(DriveError):
    """The operation is meaningless for this backend or target."""


class IOFailureError(DriveError):
    """An underlying storage operation failed.

    The original exception is kept both as ``__cause__`` (via ``raise ... from``)
    and on :attr:`cause` for callers that inspect it directly.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigInvalidError(DriveError):
    """Account configuration failed validation during save."""


class ConflictError(DriveError):
    """The target of a write already exists."""


class PathTraversalError(DriveError, ValueError):
    """A path would escape the account root."""

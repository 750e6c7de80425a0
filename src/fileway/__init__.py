# SPDX-License-Identifier: MIT
"""fileway - one file/folder model over many storage backends."""

from .exceptions import (
    ConfigInvalidError,
    ConflictError,
    DriveError,
    IOFailureError,
    NotFoundError,
    NotSupportedError,
    PathTraversalError,
)
from .models import Account, File, FileStream, FileType, Resolved

__all__ = [
    "Account",
    "ConfigInvalidError",
    "ConflictError",
    "DriveError",
    "File",
    "FileStream",
    "FileType",
    "IOFailureError",
    "NotFoundError",
    "NotSupportedError",
    "PathTraversalError",
    "Resolved",
]

# SPDX-License-Identifier: MIT
"""Driver protocol and shared types.

Defines the capability set every storage backend must implement. Callers
hold a :class:`Driver` and never depend on a concrete backend class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

from ..models import Account, File, FileStream, Resolved

if TYPE_CHECKING:
    from ..accounts import AccountStore

ItemType = Literal["string", "select"]
"""Configuration field kinds an administrative UI has to render."""


@dataclass(frozen=True)
class DriverConfig:
    """Static description of a driver."""

    name: str
    only_proxy: bool = False


@dataclass(frozen=True)
class ConfigItem:
    """One configuration field declared by a driver."""

    name: str
    label: str
    type: ItemType = "string"
    values: tuple[str, ...] = ()
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "type": self.type,
            "values": list(self.values),
            "required": self.required,
        }


@runtime_checkable
class Driver(Protocol):
    """Protocol for storage backends.

    All paths are forward-slash delimited and relative to the account's root;
    ``""`` is the root itself. Implementations confine every path to the root
    and report failures with the types in :mod:`fileway.exceptions`.
    """

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def describe(self) -> DriverConfig:
        """Return the driver's static configuration."""
        ...

    def declare_options(self) -> list[ConfigItem]:
        """Return the ordered configuration fields this driver accepts."""
        ...

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def save(self, account: Account, old: Account | None, store: AccountStore) -> None:
        """Validate *account* and persist it through *store*.

        The account is persisted even when validation fails, with the reason
        in ``account.status``.

        Raises:
            ConfigInvalidError: If the backend is not reachable with this configuration.
        """
        ...

    # ------------------------------------------------------------------
    # Metadata / listing
    # ------------------------------------------------------------------

    async def stat(self, path: str, account: Account) -> File:
        """Describe exactly the node at *path*.

        Raises:
            NotFoundError: If the path does not exist.
        """
        ...

    async def list(self, path: str, account: Account) -> list[File]:
        """List the visible children of the folder at *path* in account order.

        Raises:
            NotFoundError: If the path does not exist or is not a folder.
        """
        ...

    async def resolve(self, path: str, account: Account) -> Resolved:
        """Return the node at *path*, with its ordered children if it is a folder."""
        ...

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def direct_link(self, path: str, account: Account) -> str:
        """Return a location the caller can read the content from directly.

        Raises:
            NotSupportedError: If *path* is a folder.
        """
        ...

    async def stream_proxy(self, request: Any, account: Account) -> Any:
        """Handle a proxied read request. May be a no-op."""
        ...

    async def preview(self, path: str, account: Account) -> Any:
        """Return a backend-specific preview payload.

        Raises:
            NotSupportedError: If the backend offers no previews.
        """
        ...

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    async def make_folder(self, path: str, account: Account) -> None:
        """Create *path* and any missing ancestors. Idempotent."""
        ...

    async def move(self, src: str, dst: str, account: Account) -> None:
        """Relocate *src* to *dst*."""
        ...

    async def copy(self, src: str, dst: str, account: Account) -> None:
        """Duplicate *src* at *dst* (inside *dst* if it is an existing folder)."""
        ...

    async def delete(self, path: str, account: Account) -> None:
        """Remove *path*, recursively for folders."""
        ...

    async def upload(self, stream: FileStream, account: Account) -> None:
        """Write *stream* to ``stream.path/stream.name``, consuming the stream."""
        ...

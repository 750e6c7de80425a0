# SPDX-License-Identifier: MIT
"""Account persistence.

Account storage belongs to the caller; drivers only see the
:class:`AccountStore` protocol. Two small stores ship here: an in-memory one
(default, also used by tests) and a JSON-file one for single-process
deployments.
"""

from __future__ import annotations

import logging
import os
import pathlib
from datetime import datetime, timezone
from functools import lru_cache
from typing import Protocol, runtime_checkable

import aiofiles
import anyio
from pydantic import TypeAdapter

from .drivers import get_driver
from .exceptions import NotFoundError
from .models import Account

logger = logging.getLogger("fileway")

_ACCOUNT_LIST = TypeAdapter(list[Account])


@runtime_checkable
class AccountStore(Protocol):
    """Protocol for loading and saving accounts by name."""

    async def load(self, name: str) -> Account:
        """Return the account called *name*.

        Raises:
            NotFoundError: If no such account is stored.
        """
        ...

    async def save(self, account: Account) -> None:
        """Insert or replace *account*, stamping ``updated_at``."""
        ...

    async def list(self) -> list[Account]:
        """Return all accounts ordered by ``index``, then name."""
        ...


def _ordered(accounts) -> list[Account]:
    return sorted(accounts, key=lambda a: (a.index, a.name))


class InMemoryAccountStore:
    """Dict-backed store. Stored accounts are copies, isolated from callers."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def load(self, name: str) -> Account:
        try:
            return self._accounts[name].model_copy(deep=True)
        except KeyError:
            raise NotFoundError(f"Account not found: {name}") from None

    async def save(self, account: Account) -> None:
        account.updated_at = datetime.now(timezone.utc)
        self._accounts[account.name] = account.model_copy(deep=True)

    async def list(self) -> list[Account]:
        return _ordered(a.model_copy(deep=True) for a in self._accounts.values())


class JsonAccountStore:
    """Accounts kept in one JSON document.

    Writes go to a sibling temp file first and replace the document
    atomically. A missing document is an empty store.

    Args:
        path: Location of the JSON document.
    """

    def __init__(self, path: pathlib.Path) -> None:
        self._path = path
        self._lock = anyio.Lock()

    async def _read_all(self) -> dict[str, Account]:
        try:
            async with aiofiles.open(self._path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        return {a.name: a for a in _ACCOUNT_LIST.validate_json(raw)}

    async def _write_all(self, accounts: dict[str, Account]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        await anyio.to_thread.run_sync(lambda: self._path.parent.mkdir(parents=True, exist_ok=True))
        async with aiofiles.open(tmp, "wb") as f:
            await f.write(_ACCOUNT_LIST.dump_json(_ordered(accounts.values()), indent=2))
        await anyio.to_thread.run_sync(os.replace, tmp, self._path)

    async def load(self, name: str) -> Account:
        accounts = await self._read_all()
        if name not in accounts:
            raise NotFoundError(f"Account not found: {name}")
        return accounts[name]

    async def save(self, account: Account) -> None:
        account.updated_at = datetime.now(timezone.utc)
        async with self._lock:
            accounts = await self._read_all()
            accounts[account.name] = account.model_copy(deep=True)
            await self._write_all(accounts)
        logger.debug("Saved account [%s] to %s", account.name, self._path)

    async def list(self) -> list[Account]:
        return _ordered((await self._read_all()).values())


@lru_cache(maxsize=1)
def get_account_store() -> AccountStore:
    """Return the configured :class:`AccountStore` (cached singleton).

    Configuration
    -------------
    ``FILEWAY_ACCOUNTS_FILE``
        Path of a JSON account document. Unset keeps accounts in memory for
        the lifetime of the process.
    """
    path = os.getenv("FILEWAY_ACCOUNTS_FILE", "").strip()
    if path:
        logger.info("Using JSON account store: %s", path)
        return JsonAccountStore(pathlib.Path(path).expanduser())
    return InMemoryAccountStore()


async def save_account(account: Account, old: Account | None, store: AccountStore) -> None:
    """Validate and persist *account* through the driver named by ``account.type``.

    Raises:
        NotSupportedError: If ``account.type`` names no registered driver.
        ConfigInvalidError: If the driver rejects the configuration. The
            account is still persisted with the reason in ``status``.
    """
    driver = get_driver(account.type)
    await driver.save(account, old, store)
    logger.info("Account [%s] saved: %s", account.name, account.status)

# SPDX-License-Identifier: MIT
"""Account configuration tools.

Provides:
- list_drivers: registered backends and whether they only proxy downloads
- driver_options: the configuration fields a backend declares
- configure_account: validate and persist an account
- list_accounts: stored accounts in display order
"""

from typing import Any, TypedDict

from ..accounts import get_account_store, save_account
from ..config import logger
from ..drivers import driver_names, get_driver
from ..exceptions import NotFoundError
from ..models import Account, OrderBy, OrderDirection


class DriverInfo(TypedDict):
    """Entry returned by list_drivers."""

    name: str
    only_proxy: bool


class AccountResult(TypedDict):
    """Account as returned to tool callers."""

    name: str
    type: str
    index: int
    root_folder: str
    order_by: str
    order_direction: str
    proxy: bool
    status: str
    updated_at: str | None


def _account_result(account: Account) -> AccountResult:
    data = account.model_dump(mode="json")
    return AccountResult(**data)


async def list_drivers() -> list[DriverInfo]:
    """Return every registered driver."""
    results: list[DriverInfo] = []
    for name in driver_names():
        config = get_driver(name).describe()
        results.append(DriverInfo(name=config.name, only_proxy=config.only_proxy))
    return results


async def driver_options(driver: str) -> list[dict[str, Any]]:
    """Return the configuration fields declared by *driver*.

    Raises:
        NotSupportedError: If *driver* is not registered
    """
    return [item.to_dict() for item in get_driver(driver).declare_options()]


async def configure_account(
    name: str,
    driver: str,
    root_folder: str,
    order_by: OrderBy = "",
    order_direction: OrderDirection = "",
    index: int = 0,
) -> AccountResult:
    """Create or update an account and check that its backend is reachable.

    Args:
        name: Account name (unique)
        driver: Driver type, one of list_drivers()
        root_folder: Backend root folder or prefix
        order_by: "name", "size", "updated_at" or "" for the default
        order_direction: "ASC", "DESC" or "" for the default
        index: Display position among accounts

    Returns:
        The saved account, with status "work"

    Raises:
        ConfigInvalidError: If validation fails; the account is still saved
            with the failure reason as its status
    """
    store = get_account_store()
    try:
        old: Account | None = await store.load(name)
    except NotFoundError:
        old = None

    account = Account(
        name=name,
        type=driver,
        index=index,
        root_folder=root_folder,
        order_by=order_by,
        order_direction=order_direction,
    )
    await save_account(account, old, store)
    logger.info("configure_account: %s (%s) -> %s", name, driver, account.status)
    return _account_result(account)


async def list_accounts() -> list[AccountResult]:
    """Return all stored accounts."""
    store = get_account_store()
    return [_account_result(a) for a in await store.list()]

# SPDX-License-Identifier: MIT
"""Integration tests for account configuration tools."""

import pytest

from fileway.exceptions import ConfigInvalidError, NotSupportedError
from fileway.tools import accounts


@pytest.fixture
def wired_store(mocker, store):
    mocker.patch("fileway.tools.accounts.get_account_store", return_value=store)
    return store


@pytest.mark.integration
async def test_list_drivers():
    drivers = await accounts.list_drivers()
    assert {"name": "Local", "only_proxy": True} in drivers


@pytest.mark.integration
async def test_driver_options():
    options = await accounts.driver_options("Local")
    assert [o["name"] for o in options] == ["root_folder", "order_by", "order_direction"]
    assert options[2]["values"] == ["ASC", "DESC"]

    with pytest.raises(NotSupportedError):
        await accounts.driver_options("Nope")


@pytest.mark.integration
async def test_configure_account_success(wired_store, root):
    result = await accounts.configure_account("home", "Local", str(root), order_by="size")

    assert result["status"] == "work"
    assert result["proxy"] is True
    assert result["order_by"] == "size"
    assert result["updated_at"] is not None

    listed = await accounts.list_accounts()
    assert [a["name"] for a in listed] == ["home"]


@pytest.mark.integration
async def test_configure_account_failure_keeps_attempt(wired_store, tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(ConfigInvalidError):
        await accounts.configure_account("home", "Local", str(missing))

    (saved,) = await accounts.list_accounts()
    assert saved["root_folder"] == str(missing)
    assert saved["status"] == f"[{missing}] not exist"


@pytest.mark.integration
async def test_reconfigure_account(wired_store, root, tmp_path):
    with pytest.raises(ConfigInvalidError):
        await accounts.configure_account("home", "Local", str(tmp_path / "missing"))

    result = await accounts.configure_account("home", "Local", str(root), order_direction="DESC")
    assert result["status"] == "work"
    assert len(await accounts.list_accounts()) == 1

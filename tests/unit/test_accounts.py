# SPDX-License-Identifier: MIT
"""Unit tests for account stores and save_account."""

import json
import os

import pytest

from fileway.accounts import (
    AccountStore,
    InMemoryAccountStore,
    JsonAccountStore,
    get_account_store,
    save_account,
)
from fileway.exceptions import ConfigInvalidError, NotFoundError, NotSupportedError
from fileway.models import Account


@pytest.fixture(autouse=True)
def clear_store_cache():
    """Clear get_account_store() cache before each test to ensure isolation."""
    get_account_store.cache_clear()
    yield
    get_account_store.cache_clear()


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryAccountStore()
    return JsonAccountStore(tmp_path / "conf" / "accounts.json")


# ------------------------------------------------------------------
# Store behaviour (both implementations)
# ------------------------------------------------------------------


@pytest.mark.unit
def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(InMemoryAccountStore(), AccountStore)
    assert isinstance(JsonAccountStore(tmp_path / "a.json"), AccountStore)


@pytest.mark.unit
async def test_save_then_load(any_store):
    account = Account(name="home", type="Local", root_folder="/srv", order_by="size")
    await any_store.save(account)

    loaded = await any_store.load("home")
    assert loaded.root_folder == "/srv"
    assert loaded.order_by == "size"
    assert loaded.updated_at is not None
    assert loaded.updated_at == account.updated_at


@pytest.mark.unit
async def test_load_unknown(any_store):
    with pytest.raises(NotFoundError, match="Account not found"):
        await any_store.load("nope")


@pytest.mark.unit
async def test_save_replaces(any_store):
    await any_store.save(Account(name="home", type="Local", status="old"))
    await any_store.save(Account(name="home", type="Local", status="new"))

    accounts = await any_store.list()
    assert len(accounts) == 1
    assert accounts[0].status == "new"


@pytest.mark.unit
async def test_list_ordered_by_index_then_name(any_store):
    await any_store.save(Account(name="b", type="Local", index=1))
    await any_store.save(Account(name="c", type="Local", index=0))
    await any_store.save(Account(name="a", type="Local", index=1))

    assert [a.name for a in await any_store.list()] == ["c", "a", "b"]


@pytest.mark.unit
async def test_loaded_account_is_a_copy(any_store):
    await any_store.save(Account(name="home", type="Local", status="work"))

    loaded = await any_store.load("home")
    loaded.status = "changed"

    assert (await any_store.load("home")).status == "work"


# ------------------------------------------------------------------
# JsonAccountStore specifics
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_json_store_missing_file_is_empty(tmp_path):
    store = JsonAccountStore(tmp_path / "missing.json")
    assert await store.list() == []


@pytest.mark.unit
async def test_json_store_writes_readable_document(tmp_path):
    path = tmp_path / "accounts.json"
    store = JsonAccountStore(path)
    await store.save(Account(name="home", type="Local", root_folder="/srv"))

    document = json.loads(path.read_text())
    assert document[0]["name"] == "home"
    assert document[0]["root_folder"] == "/srv"
    assert not (tmp_path / "accounts.json.tmp").exists()


@pytest.mark.unit
async def test_json_store_shared_between_instances(tmp_path):
    path = tmp_path / "accounts.json"
    await JsonAccountStore(path).save(Account(name="home", type="Local"))

    assert (await JsonAccountStore(path).load("home")).type == "Local"


# ------------------------------------------------------------------
# get_account_store
# ------------------------------------------------------------------


@pytest.mark.unit
def test_get_account_store_defaults_to_memory(mocker):
    mocker.patch.dict(os.environ, {"FILEWAY_ACCOUNTS_FILE": ""})
    assert isinstance(get_account_store(), InMemoryAccountStore)


@pytest.mark.unit
def test_get_account_store_json(mocker, tmp_path):
    mocker.patch.dict(os.environ, {"FILEWAY_ACCOUNTS_FILE": str(tmp_path / "a.json")})
    store = get_account_store()
    assert isinstance(store, JsonAccountStore)
    assert get_account_store() is store


# ------------------------------------------------------------------
# save_account
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_save_account_dispatches_to_driver(store, root):
    account = Account(name="home", type="Local", root_folder=str(root))
    await save_account(account, None, store)

    assert (await store.load("home")).status == "work"


@pytest.mark.unit
async def test_save_account_failure_still_persisted(store, tmp_path):
    account = Account(name="home", type="Local", root_folder=str(tmp_path / "gone"))

    with pytest.raises(ConfigInvalidError):
        await save_account(account, None, store)

    assert "not exist" in (await store.load("home")).status


@pytest.mark.unit
async def test_save_account_unknown_driver(store):
    with pytest.raises(NotSupportedError, match="Unknown driver"):
        await save_account(Account(name="x", type="Nope"), None, store)

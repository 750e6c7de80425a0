# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for fileway tests."""

import pathlib

import pytest

from fileway.accounts import InMemoryAccountStore
from fileway.config import get_listing_config
from fileway.drivers.local import LocalDriver
from fileway.models import Account


@pytest.fixture
def root(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an account root with a small tree.

    Layout::

        a.txt        10 bytes
        b/c.txt       5 bytes
        .hidden       3 bytes
    """
    root_path = tmp_path / "root"
    root_path.mkdir()
    (root_path / "a.txt").write_bytes(b"0123456789")
    (root_path / "b").mkdir()
    (root_path / "b" / "c.txt").write_bytes(b"hello")
    (root_path / ".hidden").write_bytes(b"shh")
    return root_path


@pytest.fixture
def account(root: pathlib.Path) -> Account:
    """A saved Local account pointing at ``root``."""
    return Account(name="home", type="Local", root_folder=str(root), status="work", proxy=True)


@pytest.fixture
def driver() -> LocalDriver:
    return LocalDriver(get_listing_config())


@pytest.fixture
def store() -> InMemoryAccountStore:
    return InMemoryAccountStore()

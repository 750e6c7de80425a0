# SPDX-License-Identifier: MIT
"""Unit tests for the driver registry."""

import pytest

from fileway.drivers import Driver, DriverConfig, driver_names, get_driver, register_driver
from fileway.drivers import factory
from fileway.drivers.local import LocalDriver
from fileway.exceptions import NotSupportedError


class StubDriver(LocalDriver):
    """A second backend sharing the local implementation under another name."""

    def describe(self) -> DriverConfig:
        return DriverConfig(name="Stub")


@pytest.fixture
def clean_registry(mocker):
    """Isolate registrations made by a test."""
    mocker.patch.dict(factory._drivers, clear=False)


@pytest.mark.unit
def test_local_driver_registered():
    assert "Local" in driver_names()
    driver = get_driver("Local")
    assert isinstance(driver, Driver)
    assert isinstance(driver, LocalDriver)


@pytest.mark.unit
def test_unknown_driver():
    with pytest.raises(NotSupportedError, match="Unknown driver: 'FTP'"):
        get_driver("FTP")


@pytest.mark.unit
def test_register_driver(clean_registry):
    register_driver(StubDriver())

    assert driver_names() == ["Local", "Stub"]
    assert get_driver("Stub").describe().only_proxy is False


@pytest.mark.unit
def test_register_duplicate_rejected(clean_registry):
    with pytest.raises(ValueError, match="already registered"):
        register_driver(LocalDriver())


@pytest.mark.unit
def test_registry_restored_after_test():
    assert "Stub" not in driver_names()

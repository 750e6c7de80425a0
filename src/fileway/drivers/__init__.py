# SPDX-License-Identifier: MIT
"""Storage drivers for fileway.

Every backend implements the :class:`Driver` protocol; callers look drivers up
by the ``type`` stored on an account.

Usage::

    from fileway.drivers import get_driver

    driver = get_driver(account.type)
    listing = await driver.list("photos/2024", account)
"""

from .factory import driver_names, get_driver, register_driver
from .protocol import ConfigItem, Driver, DriverConfig

__all__ = ["ConfigItem", "Driver", "DriverConfig", "driver_names", "get_driver", "register_driver"]

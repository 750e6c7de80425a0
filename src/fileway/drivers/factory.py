# SPDX-License-Identifier: MIT
"""Driver registry.

Maps an account's ``type`` to the :class:`Driver` that serves it. The local
driver is registered on import; other backends register themselves with
:func:`register_driver`.
"""

from __future__ import annotations

import logging

from ..exceptions import NotSupportedError
from .local import LocalDriver
from .protocol import Driver

logger = logging.getLogger("fileway")

_drivers: dict[str, Driver] = {}


def register_driver(driver: Driver) -> None:
    """Register *driver* under its described name.

    Raises:
        ValueError: If another driver already uses that name.
    """
    name = driver.describe().name
    if name in _drivers:
        raise ValueError(f"Driver already registered: {name!r}")
    _drivers[name] = driver
    logger.debug("Registered driver: %s", name)


def get_driver(name: str) -> Driver:
    """Return the driver registered under *name*.

    Raises:
        NotSupportedError: If no driver has that name.
    """
    try:
        return _drivers[name]
    except KeyError:
        known = ", ".join(sorted(_drivers)) or "none"
        raise NotSupportedError(f"Unknown driver: {name!r}. Registered: {known}") from None


def driver_names() -> list[str]:
    return sorted(_drivers)


register_driver(LocalDriver())

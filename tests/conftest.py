# -*- coding: utf-8 -*-
"""conftest

Shared testing utilities for multiselect test-suite fixtures.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Iterator

import pytest

from multiselect_field.conf import MultiselectSettings, configure
from multiselect_field.core.cache import default_options_cache


class SettingsState:
    """Manage global multiselect configuration during tests."""

    def reset(self) -> None:
        """Restore default settings and empty the process-wide options cache."""

        configure(MultiselectSettings())
        default_options_cache().invalidate()


class AsyncioTestPlugin:
    """Minimal asyncio runner enabling ``async def`` tests without extras."""

    def __init__(self) -> None:
        """Configure the event-loop factory used for async test execution."""

        self._loop_factory = asyncio.new_event_loop

    def pytest_pyfunc_call(self, pyfuncitem: pytest.Function) -> bool | None:
        """Execute coroutine test functions inside a dedicated event loop."""

        if not inspect.iscoroutinefunction(pyfuncitem.obj):
            return None
        signature = inspect.signature(pyfuncitem.obj)
        kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in signature.parameters
            if name in pyfuncitem.funcargs
        }
        loop = self._loop_factory()
        try:
            loop.run_until_complete(pyfuncitem.obj(**kwargs))
            pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
            if pending:
                for task in pending:
                    task.cancel()
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()
        return True


settings_state = SettingsState()
_asyncio_plugin = AsyncioTestPlugin()


def pytest_configure(config: pytest.Config) -> None:
    """Integrate custom plugins with pytest's plugin manager."""

    config.addinivalue_line(
        "markers", "asyncio: execute test using the built-in asyncio loop"
    )
    config.pluginmanager.register(_asyncio_plugin, "multiselect-asyncio-plugin")


@pytest.fixture(autouse=True)
def reset_settings() -> Iterator[None]:
    """Give every test default settings and an empty options cache."""

    settings_state.reset()
    yield
    settings_state.reset()


# The End

import asyncio
import inspect
import sys

import pytest

from iconhub.app.context import PROCESS_REGISTRY



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")

    config.addinivalue_line("markers", "asyncio: mark a test to run inside an event loop")



@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function):
    # pytest-asyncio takes over when installed
    if pyfuncitem.config.pluginmanager.hasplugin("asyncio"):
        return None
    if pyfuncitem.get_closest_marker("asyncio") is None or not inspect.iscoroutinefunction(pyfuncitem.obj):
        return None

    funcargs = pyfuncitem.funcargs
    testargs = {arg: funcargs[arg] for arg in pyfuncitem._fixtureinfo.argnames}
    asyncio.run(pyfuncitem.obj(**testargs))
    return True



@pytest.fixture(autouse=True)
def _cleanProcessRegistry():
    PROCESS_REGISTRY.clear()
    yield
    PROCESS_REGISTRY.clear()

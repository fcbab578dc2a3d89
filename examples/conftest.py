"""Fixtures for the runnable examples.

Each example directory holds an ``app.py`` that builds a root ``Router``
named ``app``. The ``client`` fixture imports that module under a unique
name for every test, so module-level state such as in-memory stores
starts empty, and yields a ``TestClient`` whose lifespan has started.
"""

import importlib.util
import itertools
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from groute import Router
from groute.testing import TestClient

_loads = itertools.count()


def _load_router(app_path: Path) -> Router:
    name = f"groute_example_{app_path.parent.name}_{next(_loads)}"
    spec = importlib.util.spec_from_file_location(name, app_path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load example module from {app_path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    router = module.app
    assert isinstance(router, Router), f"{app_path} must define a root Router named 'app'"
    return router


@pytest.fixture
async def client(request: pytest.FixtureRequest) -> AsyncIterator[TestClient]:
    """A started ``TestClient`` for the ``app.py`` beside the test file."""
    router = _load_router(Path(request.path).parent / "app.py")
    async with TestClient(router) as test_client:
        yield test_client

import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from stagegen import create_app  # noqa: E402
from stagegen.routes.stage_api import _stage_cache, _stage_cache_lock  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app(
        {
            "TESTING": True,
            "STAGE_DEFAULT_ROOMS": 30,
            "STAGE_MAX_ROOMS": 400,
            "STAGE_STALL_FACTOR": 32,
            "STAGE_ENABLE_GENERATION_METRICS": True,
        }
    )
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_stage_cache():
    """Keep cached stages from leaking config between tests."""
    with _stage_cache_lock:
        _stage_cache.clear()
    yield
    with _stage_cache_lock:
        _stage_cache.clear()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")

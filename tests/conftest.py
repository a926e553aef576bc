"""Root conftest — shared test configuration."""

import os

import pytest

from testgate.config import get_settings

# Ensure tests never pick up a developer's TESTGATE_* environment
for _key in [k for k in os.environ if k.upper().startswith("TESTGATE_")]:
    del os.environ[_key]


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

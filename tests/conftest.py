"""
Pytest configuration and shared fixtures.
"""

import os

import pytest
import structlog

from brevit.core.client import BrevitClient
from brevit.core.config import BrevitConfig, reset_config
from brevit.serializers.flatten import FlattenEncoder


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep BREVIT_* variables, .env files and the global config out of tests."""
    for key in list(os.environ):
        if key.startswith("BREVIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()
    # CLI runs bind log output to streams that are closed afterwards
    structlog.reset_defaults()


@pytest.fixture
def config():
    """Default configuration."""
    return BrevitConfig()


@pytest.fixture
def client(config):
    """Client with default collaborators."""
    return BrevitClient(config)


@pytest.fixture
def encoder():
    """Flatten encoder."""
    return FlattenEncoder()


@pytest.fixture
def order_data():
    """Order with a nested customer, a uniform item array and tags."""
    return {
        "order": {
            "id": "o-456",
            "customer": {"name": "Javian", "email": "x@y.com"},
            "items": [
                {"sku": "A-1", "name": "Pen", "qty": 2},
                {"sku": "B-2", "name": "Ink, blue", "qty": 1},
            ],
            "tags": ["rush", "gift"],
        }
    }


@pytest.fixture
def png_bytes():
    """Minimal PNG header plus padding."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 24

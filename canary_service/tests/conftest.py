# Ensure repo root is on sys.path for absolute imports like `canary_service.*`
import os
import sys

import pytest
from fastapi.testclient import TestClient

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from canary_service.api.main import create_app  # noqa: E402
from canary_service.config import AppSettings  # noqa: E402

_ENV_VARS = ("PORT", "HOST", "REVISION", "COLOR", "ENVIRONMENT", "LOG_LEVEL", "APP_NAME")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app():
    return create_app(AppSettings())


@pytest.fixture
def client(app):
    return TestClient(app)

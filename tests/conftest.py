"""
Global test configuration and fixtures for RF Link Budget

This module provides shared test fixtures: isolated settings, session
stores with a controllable clock, the calculation log, and HTTP clients.
"""

import os
import tempfile
from pathlib import Path

# Keep import-time settings away from the working directory and /tmp/sessions
_IMPORT_DIR = Path(tempfile.mkdtemp(prefix="linkbudget-tests-"))
os.environ.setdefault("SESSION_DIR", str(_IMPORT_DIR / "sessions"))
os.environ.setdefault("LOG_FILE", str(_IMPORT_DIR / "link_budget.log"))

import pytest
from fastapi.testclient import TestClient

from linkbudget.core.config import Settings
from linkbudget.core.logging_config import configure_calculation_log
from linkbudget.core.utils.session_store import (
    FileSessionBackend,
    MemorySessionBackend,
    SessionStore,
)
from linkbudget.main import app
from linkbudget.web.home import get_session_store, get_settings


# ============================================================================
# Test Environment Setup
# ============================================================================

class FakeClock:
    """Manually advanced time source for session expiry tests"""

    def __init__(self, start: float = 1_800_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """Settings pointing at a per-test session directory and log file"""
    return Settings(
        SESSION_DIR=tmp_path / "sessions",
        LOG_FILE=tmp_path / "link_budget.log",
        SESSION_EXPIRY_SECONDS=3600,
        DEV_MODE=True,
    )


@pytest.fixture(scope="function")
def calculation_log(test_settings):
    """Route calculation events to the per-test log file"""
    configure_calculation_log(test_settings.LOG_FILE)
    yield test_settings.LOG_FILE


@pytest.fixture(scope="function")
def clock():
    return FakeClock()


# ============================================================================
# Session Store Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def memory_backend():
    return MemorySessionBackend()


@pytest.fixture(scope="function")
def memory_store(memory_backend, clock):
    """Session store on the in-memory backend with a fake clock"""
    return SessionStore(memory_backend, expiry_seconds=3600, clock=clock)


@pytest.fixture(scope="function")
def file_backend(test_settings):
    return FileSessionBackend(test_settings.SESSION_DIR)


@pytest.fixture(scope="function")
def file_store(file_backend, clock):
    """Session store on the file backend with a fake clock"""
    return SessionStore(file_backend, expiry_seconds=3600, clock=clock)


# ============================================================================
# Application Client Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def client(test_settings, file_store, calculation_log):
    """Create FastAPI test client backed by a temporary session directory"""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_session_store] = lambda: file_store

    # Cookies are issued with the Secure flag, so talk to the app over https
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client

    # Clean up dependency override
    app.dependency_overrides.clear()


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def valid_form_body():
    """Form body whose received power is -56.00 dBm"""
    return "tx_power=20&tx_gain=10&free_space_loss=90&misc_loss=1&rx_gain=5&rx_loss=0"


@pytest.fixture(scope="function")
def valid_json_inputs():
    return {
        "tx_power": 20,
        "tx_gain": 10,
        "free_space_loss": 90,
        "misc_loss": 1,
        "rx_gain": 5,
        "rx_loss": 0,
    }


@pytest.fixture(scope="function")
def xss_payload():
    return "<script>&\"'</script>"


# ============================================================================
# Test Markers and Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings"""
    config.addinivalue_line(
        "markers", "security: mark test as security-related"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file location"""
    for item in items:
        if "security" in str(item.fspath):
            item.add_marker(pytest.mark.security)

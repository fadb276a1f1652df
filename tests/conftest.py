"""
Pytest configuration and shared fixtures for the hcp test suite.

This module provides common fixtures, test doubles and configuration for all
test modules.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hcp.models import RunConfig  # noqa: E402
from hcp.validation import NotificationError  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


VALID_CHECK_ID = "5f0c3a4e-7b1d-4c2a-9e8f-0123456789ab"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def check_id():
    """A well-formed health check id."""
    return VALID_CHECK_ID


@pytest.fixture
def child_env():
    """Environment for spawned children, without wrapper variables."""
    return {
        k: v for k, v in os.environ.items()
        if k not in ("HCP_ID", "HCP_TEE", "HCP_IGNORE_CODE", "HCP_CONFIG")
    }


@pytest.fixture
def make_run_config(check_id, child_env):
    """Factory for RunConfig objects running `python -c <code>`."""

    def _make(code: Optional[str] = None, **kwargs) -> RunConfig:
        if code is not None:
            kwargs.setdefault("command", sys.executable)
            kwargs.setdefault("arguments", ("-c", code))
        kwargs.setdefault("environment", child_env)
        return RunConfig(check_id=check_id, **kwargs)

    return _make


# ============================================================================
# Test Doubles
# ============================================================================


class FakeClient:
    """Stand-in for HealthCheckClient that records pings instead of sending them."""

    def __init__(self, fail_start: bool = False, fail_finish: bool = False):
        self.fail_start = fail_start
        self.fail_finish = fail_finish
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.closed = False

    def start(self) -> None:
        self.calls.append(("start", None))
        if self.fail_start:
            raise NotificationError("start ping refused", url="http://test/start")

    def success(self, body: str) -> None:
        self.calls.append(("success", body))
        if self.fail_finish:
            raise NotificationError("success ping refused", url="http://test")

    def failure(self, body: str) -> None:
        self.calls.append(("failure", body))
        if self.fail_finish:
            raise NotificationError("failure ping refused", url="http://test/fail")

    def finish(self, body: str, success: bool) -> None:
        if success:
            self.success(body)
        else:
            self.failure(body)

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def endpoints(self) -> List[str]:
        return [name for name, _ in self.calls]

    @property
    def last_body(self) -> Optional[str]:
        return self.calls[-1][1] if self.calls else None


@pytest.fixture
def fake_client():
    """A recording client whose pings always succeed."""
    return FakeClient()


@pytest.fixture
def fake_client_factory():
    """Build recording clients with configurable failures."""
    return FakeClient


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from hcp.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(None)

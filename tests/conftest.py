"""
conftest.py - shared pytest fixtures for the room status service.

Provides:
- `make_settings`: builds an isolated Settings object (no .env, every provider
  setting blank unless overridden) so tests never depend on the host environment.
- `fake_session`: a stand-in for `aiohttp.ClientSession` that answers GET
  requests from canned routes keyed by URL and records how many requests were
  in flight at the same time.
- `registry`: registers cloud registry devices and status documents on the
  fake session.
"""

import sys
from pathlib import Path

import pytest

# Ensure project root and this directory are importable (`app.*`, `fakes`)
TESTS_DIR = Path(__file__).resolve().parent
for path in (TESTS_DIR.parent, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fakes import ST_URL, FakeSession, build_settings  # noqa: E402


@pytest.fixture
def make_settings():
    return build_settings


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def registry(fake_session):
    """Register cloud registry devices and their status documents"""

    def _register(devices, statuses=None):
        fake_session.add(f"{ST_URL}/v1/devices", 200, {"items": devices})
        for device_id, status in (statuses or {}).items():
            if isinstance(status, tuple):
                fake_session.add(f"{ST_URL}/v1/devices/{device_id}/status", *status)
            else:
                fake_session.add(f"{ST_URL}/v1/devices/{device_id}/status", 200, status)

    return _register

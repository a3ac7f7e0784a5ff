"""Pytest configuration for AVM Home Automation tests."""

import sys
from pathlib import Path

import aiohttp
import pytest
from aioresponses import aioresponses

# Add custom_components/avm_homeautomation to path so tests can import the
# api package directly, without Home Assistant installed
_repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(_repo_root / "custom_components" / "avm_homeautomation"))
sys.path.insert(0, str(_repo_root))

from api.client import HomeAutomationClient  # noqa: E402

from common import GATEWAY, LOGIN_URL, SID, session_info  # noqa: E402


@pytest.fixture
def mock_api():
    with aioresponses() as m:
        yield m


@pytest.fixture
async def http_session():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
async def client(http_session, mock_api):
    """A client holding an established session."""
    mock_api.get(LOGIN_URL, body=session_info(SID))
    client = HomeAutomationClient(http_session, GATEWAY, "admin", "secret")
    await client.async_login()
    yield client
    await client.async_close()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_ha: mark test as requiring Home Assistant"
    )

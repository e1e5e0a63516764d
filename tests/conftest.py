"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from itnrelay.main import get_settings
from itnrelay.models.config import Settings
from tests.fixtures.http import RELAY_ENDPOINT, FakeUpstreams
from tests.fixtures.notifications import TEST_PASSPHRASE, create_itn_fields

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_env() -> Generator[None]:
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Make every test load settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env() -> dict[str, str]:
    """Standard environment variables for testing."""
    return {
        "PAYFAST_PASSPHRASE": TEST_PASSPHRASE,
        "FORMSPREE_ENDPOINT": RELAY_ENDPOINT,
        "YOUR_SITE_BASE_URL": "https://example.co.za",
        "PAYFAST_MERCHANT_ID": "10000100",
        "PAYFAST_MERCHANT_KEY": "46f0cd694581a",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def set_mock_env(mock_env: dict[str, str]) -> Generator[None]:
    """Set mock environment variables for a test."""
    for key, value in mock_env.items():
        os.environ[key] = value
    yield


@pytest.fixture
def settings() -> Settings:
    """Settings with a passphrase and relay endpoint."""
    return Settings(
        passphrase=TEST_PASSPHRASE,
        relay_endpoint=RELAY_ENDPOINT,
        site_base_url="https://example.co.za",
        merchant_id="10000100",
        merchant_key="46f0cd694581a",
    )


@pytest.fixture
def upstreams() -> FakeUpstreams:
    """PayFast and relay fakes that accept everything."""
    return FakeUpstreams()


@pytest.fixture
def sample_fields() -> dict[str, str]:
    """Unsigned COMPLETE notification fields."""
    return create_itn_fields()

"""Pytest fixtures for pushbullet_async tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from helpers import MockApi

from pushbullet_async import PushbulletClient

TOKEN = "o.test_token"


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def make_client() -> Callable[[MockApi], PushbulletClient]:
    """Build a client whose transport is answered by a MockApi."""

    def factory(api: MockApi) -> PushbulletClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(api))
        return PushbulletClient(TOKEN, http_client=http_client)

    return factory


@pytest.fixture
def patch_client_class() -> Any:
    """Patch PushbulletClient in the CLI and yield the mock instance."""
    with patch("pushbullet_async.cli.PushbulletClient") as mock_class:
        mock_instance = MagicMock()
        mock_instance.__aenter__.return_value = mock_instance
        mock_instance.__aexit__.return_value = False
        mock_instance.get_user = AsyncMock()
        mock_instance.list_devices = AsyncMock()
        mock_instance.push = AsyncMock()
        mock_instance.upload_request = AsyncMock()
        mock_class.return_value = mock_instance
        yield mock_instance

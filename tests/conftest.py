# tests/conftest.py

"""Shared pytest fixtures for all pipeline tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_async_session() -> Generator[MagicMock, None, None]:
    """Patch the curl_cffi AsyncSession so no test touches the network."""
    with patch(
        "src.fetchers.resilient_fetcher.AsyncSession"
    ) as session_cls:
        session = MagicMock()
        session.get = AsyncMock(side_effect=ConnectionError("offline"))
        session.close = AsyncMock()
        session_cls.return_value = session
        yield session_cls

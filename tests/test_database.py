"""
Mflix API: Connection Lifecycle Unit Tests
==========================================

What we test:
    ✅ The client is created once and reused
    ✅ Missing MONGODB_URI surfaces as InternalError
    ✅ close_client() releases the shared client
    ✅ Startup ping retries transient driver errors only
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import AutoReconnect
from tenacity import stop_after_attempt, wait_none

from mflix_api import database
from mflix_api.exceptions import InternalError
from mflix_api.services.store import MongoDocumentStore


@pytest.fixture(autouse=True)
def reset_client(monkeypatch):
    monkeypatch.setattr(database, "_client", None)


class TestClientLifecycle:

    def test_client_created_once(self):
        with patch("mflix_api.database.AsyncIOMotorClient") as mock_client_cls:
            first = database.get_client()
            second = database.get_client()

        assert first is second
        mock_client_cls.assert_called_once()
        args, kwargs = mock_client_cls.call_args
        assert args[0] == "mongodb://localhost:27017"
        assert kwargs["maxPoolSize"] == database.settings.mongodb_max_pool_size

    def test_missing_uri_raises_internal_error(self, monkeypatch):
        monkeypatch.setattr(database.settings, "mongodb_uri", "")

        with pytest.raises(InternalError, match="Database is not configured"):
            database.get_client()

    def test_close_client_resets_singleton(self):
        with patch("mflix_api.database.AsyncIOMotorClient") as mock_client_cls:
            client = database.get_client()
            database.close_client()
            database.get_client()

        client.close.assert_called_once()
        assert mock_client_cls.call_count == 2

    def test_get_store_wraps_configured_database(self):
        with patch("mflix_api.database.AsyncIOMotorClient") as mock_client_cls:
            store = database.get_store()

        assert isinstance(store, MongoDocumentStore)
        mock_client_cls.return_value.__getitem__.assert_called_once_with("sample_mflix_test")


class TestStartupPing:

    @pytest.mark.asyncio
    async def test_ping_sends_admin_command(self):
        mock_client = MagicMock()
        mock_client.admin.command = AsyncMock(return_value={"ok": 1})
        with patch("mflix_api.database.AsyncIOMotorClient", return_value=mock_client):
            await database.ping()

        mock_client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_wait_for_database_retries_transient_errors(self):
        ping = AsyncMock(side_effect=[AutoReconnect("booting"), AutoReconnect("booting"), None])
        with patch("mflix_api.database.ping", ping):
            await database.wait_for_database.retry_with(
                wait=wait_none(), stop=stop_after_attempt(3)
            )()

        assert ping.await_count == 3

    @pytest.mark.asyncio
    async def test_wait_for_database_gives_up(self):
        ping = AsyncMock(side_effect=AutoReconnect("down"))
        with patch("mflix_api.database.ping", ping):
            with pytest.raises(AutoReconnect):
                await database.wait_for_database.retry_with(
                    wait=wait_none(), stop=stop_after_attempt(2)
                )()

        assert ping.await_count == 2

    @pytest.mark.asyncio
    async def test_configuration_errors_are_not_retried(self):
        ping = AsyncMock(side_effect=InternalError(message="Database is not configured"))
        with patch("mflix_api.database.ping", ping):
            with pytest.raises(InternalError):
                await database.wait_for_database.retry_with(wait=wait_none())()

        assert ping.await_count == 1

"""
Blog API — Database Lifecycle Tests
====================================

What:  Tests for client construction, the startup ping, and the lifespan handler.

What we test:
    ✅ The client is built once with pool bounds and deadlines from settings
    ✅ The startup ping retries transient failures, then gives up
    ✅ The lifespan attaches the collection and closes the client on shutdown
    ✅ An unreachable database does not abort startup
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from pymongo.errors import ConnectionFailure, OperationFailure, ServerSelectionTimeoutError
from tenacity import wait_none

from blog_api.config import Settings
from blog_api.database import (
    create_client,
    get_collection,
    get_posts_collection,
    verify_connection,
)


class TestCreateClient:

    def test_pool_and_timeouts_from_settings(self):
        config = Settings(
            mongo_url="mongodb://db.internal:27017",
            mongo_max_pool_size=50,
            mongo_min_pool_size=5,
            mongo_server_selection_timeout_ms=2000,
            mongo_timeout_ms=3000,
        )
        with patch("blog_api.database.AsyncIOMotorClient") as mock_client_cls:
            create_client(config)

        mock_client_cls.assert_called_once_with(
            "mongodb://db.internal:27017",
            maxPoolSize=50,
            minPoolSize=5,
            serverSelectionTimeoutMS=2000,
            timeoutMS=3000,
        )

    def test_get_collection_uses_configured_names(self):
        config = Settings(mongo_database="blogdb", mongo_collection="articles")
        client = MagicMock()

        get_collection(client, config)

        client.__getitem__.assert_called_once_with("blogdb")
        client.__getitem__.return_value.__getitem__.assert_called_once_with("articles")

    def test_dependency_reads_app_state(self):
        request = MagicMock()
        request.app.state.posts_collection = sentinel = object()

        assert get_posts_collection(request) is sentinel


class TestVerifyConnection:

    @pytest.mark.asyncio
    async def test_ping_success(self):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})

        await verify_connection(client)

        client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_ping_retries_then_succeeds(self):
        client = MagicMock()
        client.admin.command = AsyncMock(
            side_effect=[ServerSelectionTimeoutError("down"), {"ok": 1}]
        )

        await verify_connection.retry_with(wait=wait_none())(client)

        assert client.admin.command.await_count == 2

    @pytest.mark.asyncio
    async def test_ping_gives_up(self):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=ConnectionFailure("refused"))

        with pytest.raises(ConnectionFailure):
            await verify_connection.retry_with(wait=wait_none())(client)

        # CONNECT_RETRY_ATTEMPTS defaults to 3
        assert client.admin.command.await_count == 3


class TestLifespan:

    @pytest.mark.asyncio
    async def test_lifespan_owns_client(self, app):
        from blog_api.main import lifespan

        fake_client = MagicMock()
        with patch("blog_api.main.setup_logging"), \
             patch("blog_api.main.create_client", return_value=fake_client) as mock_create, \
             patch("blog_api.main.verify_connection", new=AsyncMock()), \
             patch("blog_api.main.close_client") as mock_close:

            async with lifespan(app):
                assert app.state.mongo_client is fake_client
                assert app.state.posts_collection is fake_client["blog_test"]["posts"]
                mock_close.assert_not_called()

        mock_create.assert_called_once()
        mock_close.assert_called_once_with(fake_client)

    @pytest.mark.asyncio
    async def test_lifespan_survives_unreachable_database(self, app):
        from blog_api.main import lifespan

        fake_client = MagicMock()
        with patch("blog_api.main.setup_logging"), \
             patch("blog_api.main.create_client", return_value=fake_client), \
             patch(
                 "blog_api.main.verify_connection",
                 new=AsyncMock(side_effect=ServerSelectionTimeoutError("down")),
             ), \
             patch("blog_api.main.close_client") as mock_close:

            async with lifespan(app):
                assert app.state.posts_collection is not None

        mock_close.assert_called_once_with(fake_client)

    @pytest.mark.asyncio
    async def test_lifespan_survives_rejected_credentials(self, app):
        from blog_api.main import lifespan

        fake_client = MagicMock()
        with patch("blog_api.main.setup_logging"), \
             patch("blog_api.main.create_client", return_value=fake_client), \
             patch(
                 "blog_api.main.verify_connection",
                 new=AsyncMock(side_effect=OperationFailure("auth failed", code=18)),
             ), \
             patch("blog_api.main.close_client") as mock_close:

            async with lifespan(app):
                assert app.state.mongo_client is fake_client

        mock_close.assert_called_once_with(fake_client)

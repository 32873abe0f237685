"""
TripNest Backend — Startup / Shutdown Tests
=============================================

What:  Store acquisition and release in the lifespan, MongoStore itself, and
       the CLI refusing to start without credentials.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from tripnest import __main__ as cli
from tripnest.config import settings
from tripnest.database import MongoStore
from tripnest.exceptions import ConfigurationError
from tripnest.main import create_app, lifespan


class TestLifespan:

    @pytest.mark.asyncio
    async def test_missing_credentials_abort_startup(self, monkeypatch):
        monkeypatch.setattr(settings, "db_user", "")
        app = create_app()

        with patch("tripnest.main.MongoStore.from_settings") as from_settings:
            with pytest.raises(ConfigurationError):
                async with lifespan(app):
                    pass
        from_settings.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_is_created_and_closed(self, memory_store):
        app = create_app()

        with patch("tripnest.main.MongoStore.from_settings", return_value=memory_store):
            async with lifespan(app):
                assert app.state.store is memory_store
                assert memory_store.closed is False

        assert memory_store.closed is True
        assert app.state.store is None

    @pytest.mark.asyncio
    async def test_unreachable_store_aborts_startup(self, memory_store):
        from pymongo.errors import ServerSelectionTimeoutError

        memory_store.reachable = False
        app = create_app()

        with patch("tripnest.main.MongoStore.from_settings", return_value=memory_store):
            with pytest.raises(ServerSelectionTimeoutError):
                async with lifespan(app):
                    pass
        assert memory_store.closed is True

    @pytest.mark.asyncio
    async def test_injected_store_is_left_open(self, memory_store):
        app = create_app(store=memory_store)

        async with lifespan(app):
            assert app.state.store is memory_store

        assert memory_store.closed is False


class TestMongoStore:

    def test_collection_lookup(self):
        client = MagicMock()
        store = MongoStore(client, "tripNestData", "tourist_spot_data")

        store.collection

        client.__getitem__.assert_called_once_with("tripNestData")
        client.__getitem__.return_value.__getitem__.assert_called_once_with("tourist_spot_data")

    @pytest.mark.asyncio
    async def test_connect_pings_admin(self):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        store = MongoStore(client, "db", "coll")

        await store.connect()

        client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_close(self):
        client = MagicMock()
        client.close = AsyncMock()

        await MongoStore(client, "db", "coll").close()

        client.close.assert_awaited_once()


class TestCli:

    def test_exits_without_credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "db_password", "")

        with patch("tripnest.__main__.uvicorn.run") as run:
            with pytest.raises(SystemExit) as exc_info:
                cli.main()

        assert exc_info.value.code == 1
        run.assert_not_called()

    def test_runs_uvicorn_on_configured_port(self, monkeypatch):
        monkeypatch.setattr(settings, "port", 6123)

        with patch("tripnest.__main__.uvicorn.run") as run:
            cli.main()

        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 6123
        assert run.call_args.args == ("tripnest.main:app",)

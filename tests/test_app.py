"""Tests for the application container."""

import httpx
import pytest

from parkit.main import ParkitApp
from parkit.screens import Route
from parkit.services.cache import CollectionCache

from tests.conftest import BASE_URL


@pytest.mark.asyncio
async def test_app_wires_screens(remote_store, tmp_path):
    app = ParkitApp(
        base_url=BASE_URL,
        storage_path=str(tmp_path / "storage.json"),
        transport=httpx.MockTransport(remote_store.handler),
        cache=CollectionCache(enabled=False),
        configure_logging=False
    )

    async with app:
        login = app.login_screen()
        await login.mount()
        assert await login.submit("jane@example.com", "secret123")

        profile = app.profile_screen()
        assert await profile.mount() is True
        assert app.navigator.current == Route.HOME

        tickets = app.tickets_screen()
        await tickets.mount()
        assert len(tickets.tickets) == 3

        health = await app.health_check()
        assert health == {
            "status": "healthy",
            "remote_store": True,
            "cache": True,
            "signed_in": True,
        }


@pytest.mark.asyncio
async def test_health_check_reports_unreachable_store(remote_store, tmp_path):
    remote_store.fail("GET", "parking", status=None)
    app = ParkitApp(
        base_url=BASE_URL,
        storage_path=str(tmp_path / "storage.json"),
        transport=httpx.MockTransport(remote_store.handler),
        cache=CollectionCache(enabled=False),
        configure_logging=False
    )

    async with app:
        health = await app.health_check()

    assert health["status"] == "degraded"
    assert health["remote_store"] is False
    assert health["signed_in"] is False

"""Tests for MockStore start/reset and hook registration."""

import pytest

from docmock import (
    DocumentClient,
    HookRejectedError,
    MockStore,
    UnsupportedHookTypeError,
)
from docmock.config import Settings
from docmock.transport import HttpTransport, InMemoryTransport


@pytest.fixture
def http_client() -> DocumentClient:
    return DocumentClient(base_url="http://docmock.invalid")


class TestStartAndReset:
    """Tests for transport injection."""

    @pytest.mark.asyncio
    async def test_start_injects_transport(self, mock_store, http_client) -> None:
        original = http_client.transport
        assert isinstance(original, HttpTransport)

        mock_store.start(http_client)
        assert isinstance(http_client.transport, InMemoryTransport)

        mock_store.reset()
        assert http_client.transport is original
        await http_client.close()

    @pytest.mark.asyncio
    async def test_start_twice_restores_original(self, mock_store, http_client) -> None:
        original = http_client.transport
        mock_store.start(http_client)
        mock_store.start(http_client)
        mock_store.reset()
        assert http_client.transport is original
        await http_client.close()

    @pytest.mark.asyncio
    async def test_reset_clears_collections_and_hooks(self, mock_store, client) -> None:
        async def reject(payload):
            return {"error": "no"}

        await client.save("Item", {"price": 30})
        mock_store.register_pre_save_hook("Brand", reject)

        mock_store.reset()
        mock_store.start(client)

        assert await client.query("Item").find() == []
        brand = await client.save("Brand", {"name": "Acme"})
        assert brand["id"]

    def test_context_manager_resets(self) -> None:
        with MockStore(settings=Settings()) as store:
            store.save_sync("Item", {"price": 1})
            assert store.store.collections() == ["Item"]
        assert store.store.collections() == []

    def test_stores_are_isolated(self) -> None:
        first = MockStore(settings=Settings())
        second = MockStore(settings=Settings())
        first.save_sync("Item", {"price": 1})
        assert second.store.scan("Item") == []

    def test_id_length_from_settings(self) -> None:
        store = MockStore(settings=Settings(store={"id_length": 16}))
        assert len(store.save_sync("Item", {})["id"]) == 16


class TestHooks:
    """Tests for hook registration through MockStore."""

    def test_unsupported_hook_type(self, mock_store) -> None:
        async def hook(payload):
            return None

        with pytest.raises(UnsupportedHookTypeError):
            mock_store.register_hook("Item", "afterSave", hook)

    @pytest.mark.asyncio
    async def test_rejecting_hook_blocks_client_save(self, mock_store, client) -> None:
        async def hook(payload):
            if payload.get("price", 0) < 10:
                return {"error": "too cheap"}
            return {"accepted": payload}

        mock_store.register_hook("Item", "beforeSave", hook)

        with pytest.raises(HookRejectedError):
            await client.save("Item", {"price": 5})
        saved = await client.save("Item", {"price": 15})

        assert [r["id"] for r in await client.query("Item").find()] == [saved["id"]]

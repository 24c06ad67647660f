"""
tests.test_credential_store

Provider A token persistence over client storage.
"""

from __future__ import annotations

import pytest

from identity_orchestrator.auth.credential_store import CredentialStore
from identity_orchestrator.storage.client_storage import ClientStorage


@pytest.mark.asyncio
async def test_get_returns_none_when_never_set(storage: ClientStorage) -> None:
    assert await CredentialStore(storage).get() is None


@pytest.mark.asyncio
async def test_set_overwrites_previous_value(storage: ClientStorage) -> None:
    store = CredentialStore(storage)
    await store.set("T1")
    await store.set("T2")
    assert await store.get() == "T2"


@pytest.mark.asyncio
async def test_value_survives_a_new_store_instance(storage: ClientStorage) -> None:
    await CredentialStore(storage).set("T1")
    # A fresh store is what the next page load sees.
    assert await CredentialStore(storage).get() == "T1"


@pytest.mark.asyncio
async def test_remove_item_clears_the_slot(storage: ClientStorage) -> None:
    await storage.set_item("k", "v")
    await storage.remove_item("k")
    assert await storage.get_item("k") is None

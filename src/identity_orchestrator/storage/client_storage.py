"""
identity_orchestrator.storage.client_storage

Persistent key/value storage for the local client.

Responsibilities:
- Mirror the browser storage contract: get/set/remove of plain strings.
- Keep each operation in its own committed transaction.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_orchestrator.db.repositories.client_state import ClientStateRepo


class ClientStorage:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_item(self, key: str) -> str | None:
        async with self._session_factory() as session:
            return await ClientStateRepo(session).get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            await ClientStateRepo(session).put(key, value)
            await session.commit()

    async def remove_item(self, key: str) -> None:
        async with self._session_factory() as session:
            await ClientStateRepo(session).delete(key)
            await session.commit()


# --- Module Notes -----------------------------------------------------------
# Quota/IO failures surface as SQLAlchemy errors; callers do not special-case them.

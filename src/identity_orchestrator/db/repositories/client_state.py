from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from identity_orchestrator.db.models import ClientStateEntry


class ClientStateRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> str | None:
        stmt = select(ClientStateEntry.value).where(ClientStateEntry.key == key)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def put(self, key: str, value: str) -> ClientStateEntry:
        existing = await self._session.get(ClientStateEntry, key)
        if existing is not None:
            existing.value = value
            await self._session.flush()
            return existing

        entry = ClientStateEntry(key=key, value=value)
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def delete(self, key: str) -> None:
        await self._session.execute(delete(ClientStateEntry).where(ClientStateEntry.key == key))

"""
identity_orchestrator.db.init_db

Creates the client-state tables on startup.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from identity_orchestrator.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    # Import registers the model on Base.metadata.
    from identity_orchestrator.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# The schema is a single key/value table, so create_all is the whole migration story.

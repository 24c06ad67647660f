"""
identity_orchestrator.db.models

Client-state schema.

Responsibilities:
- Define `ClientStateEntry`: one string value per fixed key, the local
  equivalent of a browser storage slot.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from identity_orchestrator.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ClientStateEntry(Base):
    __tablename__ = "client_state"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    # Values are opaque to storage: bearer tokens, JSON blobs for the OIDC cache.
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


# --- Module Notes -----------------------------------------------------------
# Keys are namespaced by owner (e.g. `oauth.`, `oidc.`); see the owning client modules.

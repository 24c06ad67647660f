"""
identity_orchestrator.db.base

SQLAlchemy declarative base for client-state tables.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# --- Module Notes -----------------------------------------------------------
# `init_db` creates every table registered on `Base.metadata`.

"""
identity_orchestrator.db

Persistence package (SQLAlchemy async) for local client state.

Responsibilities:
- Provide the ORM model, engine/session setup and the client-state repository.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only the local client's own state lives here; application users live in the backend.

"""
identity_orchestrator.services

Service layer.

Responsibilities:
- User synchronization with the application backend.
- The per-page-load authentication orchestrator.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services own sequencing and error policy; clients stay thin I/O boundaries.

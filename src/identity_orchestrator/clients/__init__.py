"""
identity_orchestrator.clients

Outbound client boundaries.

Responsibilities:
- Application backend user API.
- Cloud identity federation (storage credentials).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on these classes, never on raw HTTP or boto3 calls.

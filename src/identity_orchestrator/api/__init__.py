"""
identity_orchestrator.api

Local page host for the identity orchestrator.

Responsibilities:
- FastAPI app factory and router modules.
- Turn each page load into one authentication cycle and render its outcome.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The page host stays thin: it builds a navigator, runs the orchestrator, renders.

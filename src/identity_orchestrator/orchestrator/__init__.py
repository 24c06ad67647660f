"""
identity_orchestrator.orchestrator

Authentication cycle state machine (LangGraph).

Responsibilities:
- Typed cycle state, nodes, routing, and graph compilation.
- Outcome and session-context types handed to the page host.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should go through `services.auth_service.AuthOrchestrator`, not the graph.

"""
identity_orchestrator.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Page-load context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator only logs; no metrics or tracing exporters are wired here.

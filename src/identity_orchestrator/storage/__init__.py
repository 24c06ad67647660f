"""
identity_orchestrator.storage

Local client storage package.

Responsibilities:
- Key/value storage that survives process restarts ("page reloads").
"""

# Package marker.

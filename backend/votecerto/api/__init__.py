"""API Layer — FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Success payloads are {"data": ..., "message"?: str}; errors are {"error": str}
    - Caller identity resolved once per request by dependencies.get_current_identity

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""

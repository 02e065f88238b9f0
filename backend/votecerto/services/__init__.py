"""Services Layer — async handlers that load state, call pure core rules, then write.

Invariants:
    - Every handler receives the AsyncSession and the caller Identity explicitly
    - Authorization and business rules live in core/; handlers only gather their inputs
    - Row visibility always comes from query_filters (never ad hoc role checks)

Design Decisions:
    - One handler class per aggregate for locality (ADR: no god objects)
    - Handlers return JSON-ready dicts built by serializers.py; routes only wrap them
"""

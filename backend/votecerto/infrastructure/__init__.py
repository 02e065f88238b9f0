"""Infrastructure Layer — database, security, logging and file-format adapters.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library exceptions mapped to core/errors.py types at this boundary

Design Decisions:
    - Thin wrappers over libraries (SQLAlchemy, argon2, jose, openpyxl) (ADR: single responsibility)
"""

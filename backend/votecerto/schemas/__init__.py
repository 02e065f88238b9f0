"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies); ORM rows never leave through them
    - Domain enums from core/ used for enum fields
    - Validation messages are user-facing pt-BR strings (joined by the validation handler)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
    - Responses serialized by services/serializers.py: payloads carry derived fields
      (status, em_andamento, counts) that no single row holds
"""

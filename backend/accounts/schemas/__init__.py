"""Pydantic Schemas: request/response shapes for API endpoints.

Invariants:
    - Schemas describe the wire, entities (core/) describe the domain
    - Request schemas forbid unknown fields

Design Decisions:
    - Separate from core entities: schemas are API contracts (ADR: DDD boundary)
"""

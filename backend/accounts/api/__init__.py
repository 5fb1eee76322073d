"""API Layer: FastAPI application, routes, middleware, and codec.

Invariants:
    - Routes registered explicitly in router.py (no auto-discovery)
    - The API layer is the only place errors become HTTP responses

Design Decisions:
    - Thin handlers delegate to services (ADR: impureim sandwich)
"""

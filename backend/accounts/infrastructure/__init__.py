"""Infrastructure Layer: adapters, external libraries, and cross-cutting concerns.

Invariants:
    - Adapters satisfy core/repository_protocols.py contracts
    - Library failures are mapped to core/errors.py types at this boundary

Design Decisions:
    - Thin wrappers over raw libraries (ADR: single responsibility per module)
"""

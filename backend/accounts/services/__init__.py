"""Services Layer: use cases that orchestrate core logic around IO.

Invariants:
    - Use cases depend on core Protocols, never on concrete adapters
    - One use case per business operation

Design Decisions:
    - Dependencies passed to constructors by the container (ADR: explicit wiring)
"""

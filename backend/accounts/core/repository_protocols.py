"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Persistence is accessed only through these Protocol types
    - Implementations chosen by the composition root (container.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no base class
    - Async in Protocol: durable adapters do IO; cancellation arrives as
      asyncio.CancelledError and must abort outstanding work
"""

from typing import Protocol

from accounts.core.user import User


class UserRepository(Protocol):
    """Contract for user persistence. Implemented by infrastructure adapters.

    create() returns a NEW entity carrying a freshly assigned id that was never
    issued before. It raises PersistenceError only when the store rejects the
    write. Must be safe for concurrent calls.
    """
    async def create(self, user: User) -> User: ...

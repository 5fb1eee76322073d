"""Sign-Up Use Case: hash, build, validate, persist.

Invariants:
    - Hashing failures (HashingError) propagate unwrapped
    - An entity failing validate() never reaches the repository
    - Repository errors surface unchanged; nothing is retried
    - Exactly one repository.create() call per successful execute()

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): a slow hash must not
      stall the event loop for concurrent requests
    - Not idempotent: no uniqueness check exists, so repeated input yields
      distinct users (ADR: constraint belongs to a durable adapter)
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable

from accounts.core.repository_protocols import UserRepository
from accounts.core.user import User
from accounts.infrastructure.password_hasher import DEFAULT_ROUNDS, hash_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignUpInput:
    """Domain input, free of transport metadata."""
    email: str
    password: str


class SignUpUseCase:
    """Registers a new user through the injected repository."""

    def __init__(
        self,
        user_repository: UserRepository,
        hasher: Callable[[str], str] | None = None,
        hash_rounds: int = DEFAULT_ROUNDS,
    ):
        self._user_repository = user_repository
        self._hasher = hasher or partial(hash_password, rounds=hash_rounds)

    async def execute(self, data: SignUpInput) -> User:
        hashed = await asyncio.to_thread(self._hasher, data.password)

        candidate = User(email=data.email, hashed_password=hashed)
        candidate.validate()

        user = await self._user_repository.create(candidate)
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return user

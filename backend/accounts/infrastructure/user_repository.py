"""In-Memory User Repository: reference adapter for the UserRepository contract.

Invariants:
    - Every create() assigns a fresh uuid4; caller-supplied id/timestamps are discarded
    - Email is lowercased here, not in the entity
    - No state is retained between calls (no backing collection)

Design Decisions:
    - No uniqueness check: two sign-ups with one email get two ids
      (ADR: placeholder until a durable adapter owns the constraint)
    - Completes without awaiting, so task cancellation is never observed
      mid-write (known gap, harmless without IO)
"""

import logging
import uuid
from datetime import datetime, timezone

from accounts.core.domain_types import UserId
from accounts.core.user import User

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """Assigns identity and normalizes email. Safe for concurrent use."""

    async def create(self, user: User) -> User:
        created = User(
            id=UserId(uuid.uuid4()),
            email=user.email.lower(),
            hashed_password=user.hashed_password,
            created_at=datetime.now(timezone.utc),
            updated_at=None,
        )
        logger.debug("User created", extra={"user_id": str(created.id)})
        return created

"""User Entity: the storage-bound representation of a registered user.

Invariants:
    - id is None until a repository adapter assigns one
    - hashed_password is never a plaintext password
    - Email is NOT normalized here; adapters lowercase it on write
    - validate() must pass before the entity reaches an adapter

Design Decisions:
    - Frozen dataclass: adapters return a new value instead of mutating the
      candidate (ADR: entity lifecycle is create-and-discard)
"""

from dataclasses import dataclass
from datetime import datetime

from accounts.core.domain_types import UserId
from accounts.core.errors import DomainValidationError
from accounts.core.validation import is_valid_email


@dataclass(frozen=True)
class User:
    """Registered user. Unpersisted while id is None."""
    email: str
    hashed_password: str
    id: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def validate(self) -> None:
        """Raise DomainValidationError unless the entity may be persisted."""
        if not self.email:
            raise DomainValidationError("email is required", "email")
        if not is_valid_email(self.email):
            raise DomainValidationError(
                "email must be a valid email address", "email",
            )
        if not self.hashed_password:
            raise DomainValidationError(
                "hashed password is required", "hashed_password",
            )

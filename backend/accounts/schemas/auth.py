"""Auth Schemas: sign-up request and user response shapes.

Invariants:
    - SignUpRequest rejects unknown fields and non-string values at decode time
    - Field rules (email shape, password length) run in validate_fields(),
      after decoding, so decode and validation failures stay distinct
    - UserResponse never exposes hashed_password

Design Decisions:
    - Missing fields default to "" and fail in validate_fields() with a
      field-specific message instead of a generic decode error
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from accounts.core.errors import ValidationError
from accounts.core.user import User
from accounts.core.validation import (
    MIN_PASSWORD_LENGTH, is_valid_email, is_valid_password,
)


class SignUpRequest(BaseModel):
    """Sign-up payload as received on the wire."""
    model_config = ConfigDict(extra="forbid", strict=True)

    email: str = ""
    password: str = ""

    def validate_fields(self) -> None:
        """Transport-level rules. Raises ValidationError on the first failure."""
        if not self.email:
            raise ValidationError("email is required", "email")
        if not is_valid_email(self.email):
            raise ValidationError("email must be a valid email address", "email")
        if not self.password:
            raise ValidationError("password is required", "password")
        if not is_valid_password(self.password):
            raise ValidationError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters",
                "password",
            )


class UserResponse(BaseModel):
    """Public view of a persisted user."""
    id: UUID
    email: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

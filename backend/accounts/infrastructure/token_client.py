"""Token Client: HS256 JWT signing and verification.

Invariants:
    - Only HS256 tokens are accepted; any other alg header fails verification
    - Every issued token carries iat and exp
    - All PyJWT failures surface as InvalidTokenError

Design Decisions:
    - Provisioned by the container when JWT_SECRET_KEY is set; no endpoint
      issues tokens yet (sign-in is out of scope)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from accounts.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenClient:
    """Issues and verifies signed tokens with a shared secret."""

    def __init__(self, secret_key: str, token_ttl: timedelta):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._token_ttl = token_ttl

    def generate(self, claims: dict[str, Any]) -> str:
        """Sign claims, adding iat and exp."""
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + self._token_ttl}
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> dict[str, Any]:
        """Return the claims of a valid token or raise InvalidTokenError."""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            logger.debug("Token expired")
            raise InvalidTokenError("token expired") from e
        except PyJWTError as e:
            logger.warning(f"Invalid token: {e}")
            raise InvalidTokenError() from e

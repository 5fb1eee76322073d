"""Composition Root: the one place concrete implementations are chosen and wired.

Invariants:
    - Build order is fixed: repository → sign-up use case → auth handler → router
    - Construction is synchronous and fails fast: the first failing stage
      raises BootstrapError naming the stage; later stages are not attempted
    - Token client provisioned only when JWT_SECRET_KEY is set

Design Decisions:
    - Explicit constructor chaining over a DI framework or generated wiring
      (ADR: the graph is four nodes deep)
    - user_repository override: tests swap in stubs without touching use-case code
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from fastapi import FastAPI

from accounts.api.router import create_app
from accounts.api.routes.auth import AuthHandler
from accounts.config import Settings
from accounts.core.errors import BootstrapError
from accounts.core.repository_protocols import UserRepository
from accounts.infrastructure.token_client import TokenClient
from accounts.infrastructure.user_repository import InMemoryUserRepository
from accounts.services.sign_up import SignUpUseCase

T = TypeVar("T")


@dataclass
class Container:
    """Built dependency graph. router is the ASGI app handed to the server."""
    router: FastAPI
    token_client: TokenClient | None = None
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__),
    )
    closed: bool = False

    def close(self) -> None:
        """Release resources. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self.logger.info("Container closed")


def build_container(
    settings: Settings,
    logger: logging.Logger | None = None,
    user_repository: UserRepository | None = None,
) -> Container:
    """Build the full dependency graph or raise BootstrapError."""
    logger = logger or logging.getLogger(__name__)

    repository = _build_stage(
        "user_repository", logger,
        lambda: user_repository or InMemoryUserRepository(),
    )
    sign_up = _build_stage(
        "sign_up_use_case", logger,
        lambda: SignUpUseCase(
            repository, hash_rounds=settings.password_hash_rounds,
        ),
    )
    handler = _build_stage(
        "auth_handler", logger, lambda: AuthHandler(sign_up),
    )
    router = _build_stage(
        "router", logger, lambda: create_app(handler, logger),
    )
    token_client = None
    if settings.jwt_secret_key:
        token_client = _build_stage(
            "token_client", logger,
            lambda: TokenClient(
                settings.jwt_secret_key, settings.jwt_token_ttl,
            ),
        )

    logger.info("Container built")
    return Container(router=router, token_client=token_client, logger=logger)


def _build_stage(
    stage: str, logger: logging.Logger, factory: Callable[[], T],
) -> T:
    try:
        built = factory()
    except Exception as e:
        logger.error(
            f"Bootstrap stage '{stage}' failed: {e}",
            extra={"stage": stage},
        )
        raise BootstrapError(stage, str(e)) from e
    logger.debug(f"Built {stage}", extra={"stage": stage})
    return built

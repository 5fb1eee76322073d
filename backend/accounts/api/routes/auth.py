"""Auth Routes: sign-up transport handler.

Invariants:
    - Decode failure, field-rule failure, and use-case failure all answer
      with the error's http_status and {"error": message}
    - The use case is never called for a request that failed decoding or
      field validation
    - Success answers 201 with the persisted user (no password hash)

Design Decisions:
    - Handler is a class holding its use case: the container injects it,
      routes bind bound methods (ADR: explicit constructor wiring)
    - SignUpRequest → SignUpInput copy keeps transport and domain rules
      free to diverge
"""

import logging

from fastapi import APIRouter, Request, Response, status

from accounts.api import codec
from accounts.core.errors import AccountsError
from accounts.schemas.auth import SignUpRequest, UserResponse
from accounts.services.sign_up import SignUpInput, SignUpUseCase

logger = logging.getLogger(__name__)


class AuthHandler:
    """HTTP handlers for the /auth resource."""

    def __init__(self, sign_up_use_case: SignUpUseCase):
        self._sign_up_use_case = sign_up_use_case

    async def sign_up(self, request: Request) -> Response:
        """Register a user from {"email", "password"}."""
        try:
            payload = await codec.decode_request(request, SignUpRequest)
            payload.validate_fields()
            user = await self._sign_up_use_case.execute(
                SignUpInput(email=payload.email, password=payload.password),
            )
        except AccountsError as e:
            logger.info(
                f"Sign-up rejected: {e.message}",
                extra={
                    "error_code": e.code,
                    "request_id": getattr(request.state, "request_id", None),
                },
            )
            return codec.encode_error(e)

        return codec.encode(
            UserResponse.from_entity(user), status.HTTP_201_CREATED,
        )


def register_routes(router: APIRouter, handler: AuthHandler) -> None:
    """Mount /auth routes on router."""
    auth_router = APIRouter(prefix="/auth", tags=["auth"])
    auth_router.add_api_route(
        "/sign-up",
        handler.sign_up,
        methods=["POST"],
        status_code=status.HTTP_201_CREATED,
        response_model=UserResponse,
    )
    router.include_router(auth_router)

"""Request/Response Codec: strict JSON decoding and uniform JSON encoding.

Invariants:
    - Bodies larger than MAX_BODY_BYTES are rejected without buffering past the limit
    - Unknown fields, malformed JSON, and non-object bodies all raise DecodeError
    - encode() accepts any pydantic model, dataclass, or JSON-compatible value

Design Decisions:
    - Body read from request.stream() instead of FastAPI body params: the
      size limit must apply before parsing, and decode failures must not be
      confused with field-rule failures
"""

from typing import Any, TypeVar

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from accounts.core.errors import AccountsError, DecodeError

MAX_BODY_BYTES = 1 << 20  # 1 MiB

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_body(request: Request, max_bytes: int = MAX_BODY_BYTES) -> bytes:
    """Read the raw body, failing fast once max_bytes is exceeded."""
    declared = request.headers.get("content-length")
    if declared is not None:
        if not declared.isdigit():
            raise DecodeError("invalid Content-Length header")
        if int(declared) > max_bytes:
            raise DecodeError("request body too large")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise DecodeError("request body too large")
    return bytes(body)


def decode_json(raw: bytes, model: type[ModelT]) -> ModelT:
    """Parse raw JSON into model, mapping every failure to DecodeError."""
    if not raw.strip():
        raise DecodeError("request body is empty")
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        raise DecodeError(_describe(e)) from e


async def decode_request(
    request: Request, model: type[ModelT], max_bytes: int = MAX_BODY_BYTES,
) -> ModelT:
    raw = await read_body(request, max_bytes)
    return decode_json(raw, model)


def encode(value: Any, status_code: int = 200) -> JSONResponse:
    """Serialize value as a JSON response."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(value))


def encode_error(exc: AccountsError) -> JSONResponse:
    return encode(exc.to_response(), exc.http_status)


def _describe(exc: PydanticValidationError) -> str:
    """Human-readable message for the first decode failure."""
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    kind = err["type"]
    if kind == "json_invalid":
        return "request body contains malformed JSON"
    if kind == "extra_forbidden":
        return f'request body contains unknown field "{loc}"'
    if kind in ("model_type", "model_attributes_type"):
        return "request body must be a JSON object"
    return f'request body has an invalid value for "{loc}": {err["msg"]}'

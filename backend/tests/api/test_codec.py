"""Codec: decode failures and JSON encoding.

Tests:
    - Malformed JSON, unknown fields, wrong types, non-objects → DecodeError
    - Empty body → DecodeError
    - encode() serializes pydantic models, UUIDs, and datetimes
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from accounts.api.codec import decode_json, encode, encode_error
from accounts.core.errors import DecodeError, ValidationError
from accounts.schemas.auth import SignUpRequest, UserResponse


def test_decodes_well_formed_body():
    req = decode_json(b'{"email": "a@b.com", "password": "abcdef"}', SignUpRequest)
    assert req.email == "a@b.com"
    assert req.password == "abcdef"


def test_missing_fields_decode_as_empty():
    req = decode_json(b"{}", SignUpRequest)
    assert req.email == ""
    assert req.password == ""


@pytest.mark.parametrize("raw, fragment", [
    (b'{"email": "a@b.com",', "malformed JSON"),
    (b'{"email": "a@b.com", "password": "abcdef", "admin": true}', 'unknown field "admin"'),
    (b'["a@b.com", "abcdef"]', "JSON object"),
    (b'{"email": 42, "password": "abcdef"}', '"email"'),
    (b'{"email": "a@b.com", "password": "abcdef"} trailing', "malformed JSON"),
])
def test_decode_failures(raw, fragment):
    with pytest.raises(DecodeError) as exc:
        decode_json(raw, SignUpRequest)
    assert fragment in exc.value.message


def test_empty_body_rejected():
    with pytest.raises(DecodeError, match="empty"):
        decode_json(b"   ", SignUpRequest)


def test_encode_serializes_model():
    uid = uuid4()
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    res = encode(
        UserResponse(id=uid, email="a@b.com", created_at=now, updated_at=None), 201,
    )
    assert res.status_code == 201
    assert b'"id":"' + str(uid).encode() + b'"' in res.body
    assert b'"updated_at":null' in res.body
    assert b"2026-01-02T03:04:05" in res.body


def test_encode_error_uses_error_status():
    res = encode_error(ValidationError("email is required", "email"))
    assert res.status_code == 400
    assert res.body == b'{"error":"email is required"}'

"""Sign-Up Use Case: orchestration order and failure propagation.

Tests:
    - Success persists exactly once and never stores the plaintext
    - Hashing failure propagates unwrapped, no persistence
    - Entity validation failure → DomainValidationError, no persistence
    - Repository errors surface unchanged (no retry)
    - Identical input twice → two users with distinct ids
"""

import pytest

from accounts.core.errors import DomainValidationError, HashingError, PersistenceError
from accounts.infrastructure.password_hasher import verify_password
from accounts.services.sign_up import SignUpInput, SignUpUseCase


class FailingRepository:
    def __init__(self):
        self.calls = 0

    async def create(self, user):
        self.calls += 1
        raise PersistenceError("write rejected", "create")


def _failing_hasher(plaintext: str) -> str:
    raise HashingError("entropy source unavailable")


async def test_execute_persists_hashed_user(repository):
    use_case = SignUpUseCase(repository, hash_rounds=4)

    user = await use_case.execute(SignUpInput(email="Bob@Example.com", password="hunter22"))

    assert len(repository.calls) == 1
    stored = repository.calls[0]
    assert stored.id is None
    assert stored.email == "Bob@Example.com"
    assert stored.hashed_password != "hunter22"
    assert verify_password("hunter22", stored.hashed_password)
    assert user.id is not None
    assert user.email == "bob@example.com"


async def test_hashing_failure_propagates_unwrapped(repository):
    use_case = SignUpUseCase(repository, hasher=_failing_hasher)

    with pytest.raises(HashingError, match="entropy"):
        await use_case.execute(SignUpInput(email="a@b.com", password="hunter22"))
    assert repository.calls == []


async def test_invalid_entity_never_reaches_repository(repository):
    use_case = SignUpUseCase(repository, hasher=lambda p: "hashed")

    with pytest.raises(DomainValidationError):
        await use_case.execute(SignUpInput(email="not-an-email", password="hunter22"))
    assert repository.calls == []


async def test_empty_hash_fails_domain_validation(repository):
    use_case = SignUpUseCase(repository, hasher=lambda p: "")

    with pytest.raises(DomainValidationError) as exc:
        await use_case.execute(SignUpInput(email="a@b.com", password="hunter22"))
    assert exc.value.field == "hashed_password"
    assert repository.calls == []


async def test_repository_error_surfaces_unchanged():
    repo = FailingRepository()
    use_case = SignUpUseCase(repo, hasher=lambda p: "hashed")

    with pytest.raises(PersistenceError, match="write rejected"):
        await use_case.execute(SignUpInput(email="a@b.com", password="hunter22"))
    assert repo.calls == 1


async def test_execute_is_not_idempotent(repository):
    use_case = SignUpUseCase(repository, hash_rounds=4)
    data = SignUpInput(email="a@b.com", password="hunter22")

    first = await use_case.execute(data)
    second = await use_case.execute(data)

    assert first.id != second.id
    assert len(repository.calls) == 2

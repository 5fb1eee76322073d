"""Composition Root: build order, fail-fast, provisioning.

Invariants:
    - Stages built repository → use case → handler → router
    - First failing stage raises BootstrapError; later stages are skipped
    - Token client only when JWT_SECRET_KEY is configured
"""

import pytest
from fastapi import FastAPI

import accounts.container as container_module
from accounts.container import build_container
from accounts.core.errors import BootstrapError
from accounts.infrastructure.token_client import TokenClient


def test_builds_router(settings):
    container = build_container(settings)
    assert isinstance(container.router, FastAPI)
    paths = {route.path for route in container.router.routes}
    assert {"/health", "/api/v1/auth/sign-up"} <= paths


def test_build_order(settings, monkeypatch):
    order = []
    real = {
        "InMemoryUserRepository": container_module.InMemoryUserRepository,
        "SignUpUseCase": container_module.SignUpUseCase,
        "AuthHandler": container_module.AuthHandler,
        "create_app": container_module.create_app,
    }

    def recording(name):
        def build(*args, **kwargs):
            order.append(name)
            return real[name](*args, **kwargs)
        return build

    for name in real:
        monkeypatch.setattr(container_module, name, recording(name))

    build_container(settings)

    assert order == ["InMemoryUserRepository", "SignUpUseCase", "AuthHandler", "create_app"]


def test_failing_stage_raises_bootstrap_error(settings, monkeypatch):
    router_built = []

    def broken_handler(*args, **kwargs):
        raise RuntimeError("handler unavailable")

    monkeypatch.setattr(container_module, "AuthHandler", broken_handler)
    monkeypatch.setattr(
        container_module, "create_app", lambda *a, **k: router_built.append(True),
    )

    with pytest.raises(BootstrapError) as exc:
        build_container(settings)

    assert exc.value.stage == "auth_handler"
    assert "handler unavailable" in exc.value.message
    assert router_built == []


def test_repository_override_is_used(settings, repository):
    container = build_container(settings, user_repository=repository)
    assert container.router is not None


def test_token_client_provisioned_with_secret(settings):
    assert build_container(settings).token_client is None

    settings.jwt_secret_key = "test-secret-key-for-testing-only-32chars"
    container = build_container(settings)
    assert isinstance(container.token_client, TokenClient)


def test_close_is_idempotent(settings):
    container = build_container(settings)
    container.close()
    container.close()
    assert container.closed

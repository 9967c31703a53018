import asyncio

import pytest

from auth import security, service
from core.errors import AuthFailure, AuthFailureKind


def run(coro):
    return asyncio.run(coro)


def test_sign_up_then_login(store):
    granted = run(service.sign_up(store, "alice@example.com", "pw123"))
    assert granted is not None

    grant = run(service.login(store, "alice@example.com", "pw123"))

    assert grant.account.email == "alice@example.com"
    assert security.resolve_identity(grant.token).subject_id == grant.account.id


def test_login_normalizes_email(store):
    run(service.sign_up(store, "Alice@Example.com ", "pw123"))

    grant = run(service.login(store, "alice@example.com", "pw123"))

    assert grant.account.email == "alice@example.com"


def test_sign_up_defaults_username(store):
    grant = run(service.sign_up(store, "bob@example.com", "pw"))

    assert grant.account.username == "noname"


def test_account_shape_excludes_password_hash(store):
    grant = run(service.sign_up(store, "bob@example.com", "pw", username="bob"))

    dumped = grant.account.model_dump()
    assert "password_hash" not in dumped
    assert "password" not in dumped
    assert store.accounts.rows["bob@example.com"]["password_hash"] != "pw"


def test_wrong_password_is_bad_credential(store):
    run(service.sign_up(store, "alice@example.com", "pw123"))

    with pytest.raises(AuthFailure) as exc_info:
        run(service.login(store, "alice@example.com", "wrong"))
    assert exc_info.value.failure is AuthFailureKind.BAD_CREDENTIAL


def test_unknown_email_is_no_such_user(store):
    with pytest.raises(AuthFailure) as exc_info:
        run(service.login(store, "ghost@example.com", "pw123"))
    assert exc_info.value.failure is AuthFailureKind.NO_SUCH_USER


def test_duplicate_sign_up_returns_none(store):
    assert run(service.sign_up(store, "alice@example.com", "pw123")) is not None
    assert run(service.sign_up(store, "alice@example.com", "other")) is None


def test_sign_up_with_store_down_returns_none(broken_store):
    assert run(service.sign_up(broken_store, "alice@example.com", "pw123")) is None


def test_sign_up_with_overlong_password_returns_none(store):
    assert run(service.sign_up(store, "alice@example.com", "x" * 73)) is None
    assert store.accounts.rows == {}

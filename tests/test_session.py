import logging

from fastapi import Response

from auth import session
from auth.session import AuthRequirement, decide_auth_requirement


def test_sign_in_and_sign_up_bypass_auth():
    assert decide_auth_requirement("SignIn") is AuthRequirement.BYPASS
    assert decide_auth_requirement("SignUp") is AuthRequirement.BYPASS


def test_other_operations_require_auth():
    for name in ("surveys", "survey", "addSurvey", "signin", "", None):
        assert decide_auth_requirement(name) is AuthRequirement.REQUIRE


def test_bypass_allowlist_is_configurable(monkeypatch):
    monkeypatch.setenv("AUTH_BYPASS_OPERATIONS", "SignIn")

    assert decide_auth_requirement("SignIn") is AuthRequirement.BYPASS
    assert decide_auth_requirement("SignUp") is AuthRequirement.REQUIRE


def test_session_cookie_outside_production():
    response = Response()
    session.set_session_cookie(response, "tok")

    header = response.headers["set-cookie"]
    assert header.startswith("id=tok;")
    assert "HttpOnly" in header
    assert "Max-Age=604800" in header
    assert "Secure" not in header
    assert "SameSite" not in header


def test_session_cookie_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    response = Response()
    session.set_session_cookie(response, "tok")

    header = response.headers["set-cookie"]
    assert "Secure" in header
    assert "SameSite=none" in header


def test_lifetime_mismatch_is_flagged(caplog):
    with caplog.at_level(logging.WARNING, logger="auth.session"):
        assert session.warn_on_lifetime_mismatch() is True
    assert "session_lifetime_mismatch" in caplog.text


def test_matching_lifetimes_are_not_flagged(monkeypatch):
    monkeypatch.setenv("SESSION_COOKIE_MAX_AGE_S", "86400")

    assert session.warn_on_lifetime_mismatch() is False

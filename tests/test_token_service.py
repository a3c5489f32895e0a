"""Tests for access token issuance and verification."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from notes_api.core.config import Settings
from notes_api.services.token_service import (
    InvalidTokenError,
    create_access_token,
    verify_access_token,
)


def test_roundtrip_carries_user_id(settings):
    token = create_access_token(user_id="abc123", settings=settings)
    payload = verify_access_token(token, settings)
    assert payload["userId"] == "abc123"
    assert payload["exp"] > payload["iat"]


def test_default_expiry_is_3600_minutes(settings):
    token = create_access_token(user_id="abc123", settings=settings)
    payload = verify_access_token(token, settings)
    assert payload["exp"] - payload["iat"] == 3600 * 60


def test_expired_token_is_rejected(settings):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    token = jwt.encode(
        {"userId": "abc123", "iat": int((past - timedelta(hours=1)).timestamp()), "exp": int(past.timestamp())},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(jwt.ExpiredSignatureError):
        verify_access_token(token, settings)


def test_token_signed_with_other_secret_is_rejected(settings):
    other = Settings(jwt_secret="another-secret-entirely", log_level="WARNING")
    token = create_access_token(user_id="abc123", settings=other)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, settings)


def test_tampered_token_is_rejected(settings):
    token = create_access_token(user_id="abc123", settings=settings)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
    with pytest.raises(InvalidTokenError):
        verify_access_token(tampered, settings)


def test_token_without_user_id_is_rejected(settings):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": int(now.timestamp()), "exp": int((now + timedelta(minutes=5)).timestamp())},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, settings)


def test_missing_secret_raises_runtime_error():
    s = Settings(jwt_secret=None, log_level="WARNING")
    with pytest.raises(RuntimeError):
        create_access_token(user_id="abc123", settings=s)

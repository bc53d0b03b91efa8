"""Unit tests for JWT decoding and the caller-email dependency."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from stayhub.auth.dependencies import get_caller_email
from stayhub.auth.jwt import create_access_token, decode_token
from stayhub.config import settings


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _encode(claims: dict) -> str:
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


class TestCreateAccessToken:
    def test_sub_is_email(self):
        payload = decode_token(create_access_token("renter@example.com"))
        assert payload["sub"] == "renter@example.com"
        assert payload["type"] == "access"
        assert "exp" in payload
        assert "iat" in payload

    def test_expired_token_rejected(self):
        token = create_access_token("renter@example.com", expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_secret_rejected(self):
        token = jwt.encode({"sub": "renter@example.com"}, "another-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(JWTError):
            decode_token(token)


class TestGetCallerEmail:
    async def test_returns_email(self):
        token = create_access_token("renter@example.com")
        assert await get_caller_email(_credentials(token)) == "renter@example.com"

    async def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_email(None)
        assert exc_info.value.status_code == 401

    async def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_email(_credentials("garbage"))
        assert exc_info.value.status_code == 401

    async def test_refresh_token_rejected(self):
        expire = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = _encode({"sub": "renter@example.com", "exp": expire, "type": "refresh"})
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_email(_credentials(token))
        assert exc_info.value.detail == "Invalid token type"

    async def test_token_without_type_accepted(self):
        expire = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = _encode({"sub": "renter@example.com", "exp": expire})
        assert await get_caller_email(_credentials(token)) == "renter@example.com"

    async def test_token_without_sub(self):
        expire = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = _encode({"exp": expire, "type": "access"})
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_email(_credentials(token))
        assert exc_info.value.status_code == 401

"""Unit tests for authentication helpers and the current-user dependency."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt
from pydantic import ValidationError

from tradejournal.core.config import config
from tradejournal.core.security import (
    create_access_token,
    credentials_exception,
    get_current_user,
    hash_password,
    verify_password,
    verify_token,
)
from tradejournal.models.user import User
from tradejournal.schemas.auth import RegisterRequest


def _request(cookies=None):
    request = MagicMock()
    request.cookies = cookies or {}
    return request


def _db_returning(user):
    mock_db = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = user
    mock_db.execute.return_value = mock_result
    return mock_db


@pytest.mark.unit
def test_password_hash_round_trip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


@pytest.mark.unit
def test_verify_password_without_hash_fails():
    """OAuth-only users have no password hash and can never log in with a password."""
    assert not verify_password("anything", None)
    assert not verify_password("anything", "not-a-bcrypt-hash")


@pytest.mark.unit
def test_token_subject_is_user_id():
    token = create_access_token({"sub": 42})

    payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    assert payload["sub"] == "42"
    assert verify_token(token, credentials_exception).user_id == 42


@pytest.mark.unit
@pytest.mark.parametrize(
    "token",
    [
        "garbage",
        jwt.encode({"sub": "1"}, "some-other-key", algorithm="HS256"),
        jwt.encode({"foo": "bar"}, config.SECRET_KEY, algorithm=config.ALGORITHM),
        jwt.encode({"sub": "abc"}, config.SECRET_KEY, algorithm=config.ALGORITHM),
    ],
)
def test_verify_token_rejects_bad_tokens(token):
    with pytest.raises(HTTPException) as exc_info:
        verify_token(token, credentials_exception)

    assert exc_info.value.status_code == 401


@pytest.mark.unit
def test_expired_token_is_rejected():
    token = create_access_token({"sub": 1}, expires_delta=timedelta(seconds=-5))

    with pytest.raises(HTTPException):
        verify_token(token, credentials_exception)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_current_user_from_bearer():
    user = User(email="trader@example.com")
    user.id = 7
    mock_db = _db_returning(user)
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token({"sub": 7}))

    result = await get_current_user(_request(), credentials, mock_db)

    assert result is user


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_current_user_from_cookie():
    user = User(email="trader@example.com")
    user.id = 7
    mock_db = _db_returning(user)
    request = _request({config.COOKIE_NAME: create_access_token({"sub": 7})})

    result = await get_current_user(request, None, mock_db)

    assert result is user


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_current_user_without_token_never_queries():
    mock_db = _db_returning(None)

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(_request(), None, mock_db)

    assert exc_info.value.status_code == 401
    mock_db.execute.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_current_user_unknown_user():
    mock_db = _db_returning(None)
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token({"sub": 999}))

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(_request(), credentials, mock_db)

    assert exc_info.value.status_code == 401


@pytest.mark.unit
def test_register_password_limited_to_bcrypt_bytes():
    # 36 two-byte characters fill bcrypt's 72-byte input exactly
    accepted = RegisterRequest(email="a@example.com", password="é" * 36)
    assert verify_password(accepted.password, hash_password(accepted.password))

    with pytest.raises(ValidationError):
        RegisterRequest(email="a@example.com", password="é" * 37)
    with pytest.raises(ValidationError):
        RegisterRequest(email="a@example.com", password="p" * 73)

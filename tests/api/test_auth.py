"""
Tests for bearer token authentication.
"""

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from api.auth import create_access_token, decode_access_token, get_caller_id
from api.config import config
from summaries.errors import Unauthenticated


def test_token_round_trip():
    token = create_access_token("user-1")
    assert decode_access_token(token) == "user-1"


def test_wrong_secret_rejected():
    token = jwt.encode({"sub": "user-1"}, "another-secret", algorithm=config.algorithm)

    with pytest.raises(Unauthenticated):
        decode_access_token(token)


def test_missing_subject_rejected():
    token = jwt.encode({"name": "nobody"}, config.secret_key, algorithm=config.algorithm)

    with pytest.raises(Unauthenticated) as exc_info:
        decode_access_token(token)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_get_caller_id_without_credentials():
    with pytest.raises(Unauthenticated):
        await get_caller_id(None)


@pytest.mark.asyncio
async def test_get_caller_id_with_token():
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token("user-9"))
    assert await get_caller_id(credentials) == "user-9"

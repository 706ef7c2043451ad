import jwt
import pytest
from datetime import datetime, timedelta, timezone

from app.core.config import settings
from app.core.errors import ExpiredCredential, InvalidCredential
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("wrong", hashed)

def test_token_carries_user_and_role():
    payload = decode_access_token(create_access_token("us-1", "teacher"))
    assert payload["sub"] == "us-1"
    assert payload["role"] == "teacher"
    assert payload["exp"] > payload["iat"]

def test_expired_token():
    token = create_access_token("us-1", "teacher", expires_delta=timedelta(seconds=-10))
    with pytest.raises(ExpiredCredential):
        decode_access_token(token)

def test_garbage_token():
    with pytest.raises(InvalidCredential):
        decode_access_token("not.a.jwt")

def test_wrong_signature():
    token = jwt.encode(
        {"sub": "us-1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "another-secret",
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(InvalidCredential):
        decode_access_token(token)

def test_token_without_subject():
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(InvalidCredential):
        decode_access_token(token)

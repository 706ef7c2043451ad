# app/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import ExpiredCredential, InvalidCredential

logger = logging.getLogger("assignment.auth")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": user_id, "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Decodifica e verifica un JWT.
    Solleva ExpiredCredential se scaduto, InvalidCredential per qualsiasi altro problema.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.warning("Token scaduto")
        raise ExpiredCredential()
    except jwt.InvalidTokenError as e:
        logger.warning("Token non valido: %s", e)
        raise InvalidCredential()

    if not payload.get("sub"):
        raise InvalidCredential()
    return payload

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core.deps import get_user_repository
from app.core.errors import (
    EmailAlreadyRegistered,
    InvalidCredential,
    InvalidLogin,
    MissingCredential,
    ValidationFailed,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from app.database.user_repo import UserRepo
from app.schemas.context import Role, UserContext
from app.schemas.user import User, UserCreate, UserLogin, UserPublic

logger = logging.getLogger("assignment.auth")

# auto_error=False: l'assenza del token la gestiamo noi con un 401
bearer_scheme = HTTPBearer(auto_error=False)

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


def create_user_id() -> str:
    return f"us-{uuid.uuid4().hex}"


def _normalize_email(value: Optional[str]) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return _email_adapter.validate_python(value.strip()).lower()
    except ValidationError:
        return None


def _to_public(user: User) -> UserPublic:
    return UserPublic(**user.model_dump(exclude={"password_hash"}))


class AuthService:

    @staticmethod
    async def register(data: UserCreate, users: UserRepo) -> Tuple[str, UserPublic]:
        errors: List[dict] = []

        name = (data.name or "").strip()
        if not name:
            errors.append({"field": "name", "message": "Name is required"})
        email = _normalize_email(data.email)
        if email is None:
            errors.append({"field": "email", "message": "Valid email is required"})
        if not data.password or len(data.password) < MIN_PASSWORD_LENGTH:
            errors.append({
                "field": "password",
                "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            })
        if data.role not in {r.value for r in Role}:
            errors.append({"field": "role", "message": "Role must be either teacher or student"})
        if errors:
            raise ValidationFailed(errors)

        if await users.find_by_email(email):
            raise EmailAlreadyRegistered()

        user = User(
            userId=create_user_id(),
            name=name,
            email=email,
            password_hash=get_password_hash(data.password),
            role=data.role,
            createdAt=datetime.now(timezone.utc),
        )
        await users.create(user)
        logger.info("Nuovo utente %s registrato come %s", user.userId, user.role)

        return create_access_token(user.userId, user.role), _to_public(user)

    @staticmethod
    async def login(data: UserLogin, users: UserRepo) -> Tuple[str, UserPublic]:
        errors: List[dict] = []
        if not data.email or not data.email.strip():
            errors.append({"field": "email", "message": "Email is required"})
        if not data.password:
            errors.append({"field": "password", "message": "Password is required"})
        if errors:
            raise ValidationFailed(errors)

        user = await users.find_by_email(data.email.strip().lower())
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("Login fallito per %s", data.email)
            raise InvalidLogin()

        return create_access_token(user.userId, user.role), _to_public(user)

    @staticmethod
    async def resolve_token(token: str, users: UserRepo) -> UserContext:
        """Token -> (user_id, role). L'utente deve esistere ancora nel database."""
        payload = decode_access_token(token)
        user = await users.find_by_id(payload["sub"])
        if user is None:
            logger.warning("Token valido ma utente %s inesistente", payload["sub"])
            raise InvalidCredential()
        return UserContext(user_id=user.userId, role=user.role, name=user.name, email=user.email)

    @staticmethod
    async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        users: UserRepo = Depends(get_user_repository),
    ) -> UserContext:
        if credentials is None or not credentials.credentials:
            raise MissingCredential()
        return await AuthService.resolve_token(credentials.credentials, users)

    @staticmethod
    async def get_profile(user: UserContext, users: UserRepo) -> UserPublic:
        found = await users.find_by_id(user.user_id)
        if found is None:
            raise InvalidCredential()
        return _to_public(found)

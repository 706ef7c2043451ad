from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.schemas.context import Role


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    """Utente come salvato nel database (password solo come hash)."""
    model_config = ConfigDict(use_enum_values=True)

    userId: str
    name: str
    email: str
    password_hash: str
    role: Role
    createdAt: datetime


class UserPublic(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    userId: str
    name: str
    email: str
    role: Role
    createdAt: datetime


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPublic

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    teacher = "teacher"
    student = "student"


class UserContext(BaseModel):
    """Identità risolta dal token: chi sta chiamando e con quale ruolo."""
    model_config = ConfigDict(use_enum_values=True)

    user_id: str
    role: Role
    name: Optional[str] = None
    email: Optional[str] = None

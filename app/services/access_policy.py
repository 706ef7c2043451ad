"""
Regole di accesso agli assignment come funzioni pure su (ruolo, owner, chiamante).
Nessun accesso al database: il service le combina con i dati letti dal repo.
"""
from typing import Optional

from app.schemas.context import Role


def _role(role) -> Role:
    return Role(role)


def is_teacher(role) -> bool:
    return _role(role) is Role.teacher


def can_create(role) -> bool:
    return is_teacher(role)


def can_view(role, owner_id: str, caller_id: str) -> bool:
    # gli studenti vedono tutto, i teacher solo i propri
    if _role(role) is Role.student:
        return True
    return owner_id == caller_id


def can_modify(role, owner_id: str, caller_id: str) -> bool:
    return _role(role) is Role.teacher and owner_id == caller_id


def owner_scope(role, caller_id: str) -> Optional[str]:
    """Owner a cui restringere il listing, None se il chiamante vede tutto."""
    if _role(role) is Role.teacher:
        return caller_id
    return None

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence
from app.schemas.user import User

class UserRepo(ABC):
    @abstractmethod
    async def create(self, user: User) -> str:
        """Salva un nuovo utente. Solleva EmailAlreadyRegistered se l'email è già in uso."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def find_many(self, user_ids: Iterable[str]) -> Sequence[User]:
        """Ritorna gli utenti con gli ID indicati (quelli inesistenti vengono ignorati)."""
        raise NotImplementedError

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence
from app.schemas.assignment import Assignment

class AssignmentRepo(ABC):
    @abstractmethod
    async def create(self, assignment: Assignment) -> str:
        """Salva un assignment completo (id già generato dal service) e ne ritorna l'ID."""
        raise NotImplementedError

    @abstractmethod
    async def find_one(self, assignment_id: str) -> Optional[Assignment]:
        """Ritorna un assignment per ID, oppure None se non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def find_many(self, teacher_id: Optional[str] = None) -> Sequence[Assignment]:
        """Ritorna gli assignment (solo quelli del teacher se indicato), dal più recente."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, assignment_id: str, fields: Dict[str, Any]) -> Optional[Assignment]:
        """Applica un aggiornamento parziale. Ritorna il documento aggiornato o None se non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, assignment_id: str) -> bool:
        """Cancella un assignment. Ritorna True se qualcosa è stato cancellato."""
        raise NotImplementedError

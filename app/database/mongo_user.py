# app/database/mongo_user.py
from typing import Iterable, List, Optional, Sequence
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.core.errors import EmailAlreadyRegistered
from app.database.errors import storage_errors
from app.database.user_repo import UserRepo
from app.schemas.user import User


class MongoUserRepository(UserRepo):
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["users"]

    def _from_doc(self, d: dict) -> User:
        base = {k: v for k, v in d.items() if k not in {"_id"}}
        return User(**base)

    async def create(self, user: User) -> str:
        with storage_errors("create user"):
            try:
                await self.col.insert_one(user.model_dump())
            except DuplicateKeyError:
                raise EmailAlreadyRegistered()
        return user.userId

    async def find_by_email(self, email: str) -> Optional[User]:
        with storage_errors("find user by email"):
            d = await self.col.find_one({"email": email.lower()})
        return self._from_doc(d) if d else None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        with storage_errors("find user"):
            d = await self.col.find_one({"userId": str(user_id)})
        return self._from_doc(d) if d else None

    async def find_many(self, user_ids: Iterable[str]) -> Sequence[User]:
        ids = list({str(i) for i in user_ids})
        if not ids:
            return []
        with storage_errors("find users"):
            docs: List[dict] = [d async for d in self.col.find({"userId": {"$in": ids}})]
        return [self._from_doc(d) for d in docs]

    async def ensure_indexes(self):
        await self.col.create_index("userId", unique=True)
        await self.col.create_index("email", unique=True)

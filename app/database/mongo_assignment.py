# app/database/mongo_assignment.py
from typing import Any, Dict, List, Optional, Sequence
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from app.database.assignment_repo import AssignmentRepo
from app.database.errors import storage_errors
from app.schemas.assignment import Assignment


class MongoAssignmentRepository(AssignmentRepo):
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["assignments"]

    def _from_doc(self, d: dict) -> Assignment:
        base = {k: v for k, v in d.items() if k not in {"_id"}}
        return Assignment(**base)

    async def create(self, assignment: Assignment) -> str:
        doc = assignment.model_dump()
        with storage_errors("create assignment"):
            await self.col.insert_one(doc)
        return assignment.assignmentId

    async def find_one(self, assignment_id: str) -> Optional[Assignment]:
        with storage_errors("find assignment"):
            d = await self.col.find_one({"assignmentId": str(assignment_id)})
        return self._from_doc(d) if d else None

    async def find_many(self, teacher_id: Optional[str] = None) -> Sequence[Assignment]:
        query = {} if teacher_id is None else {"teacherId": str(teacher_id)}
        with storage_errors("list assignments"):
            cursor = self.col.find(query).sort("createdAt", DESCENDING)
            docs: List[dict] = [d async for d in cursor]
        return [self._from_doc(d) for d in docs]

    async def update(self, assignment_id: str, fields: Dict[str, Any]) -> Optional[Assignment]:
        with storage_errors("update assignment"):
            d = await self.col.find_one_and_update(
                {"assignmentId": str(assignment_id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        return self._from_doc(d) if d else None

    async def delete(self, assignment_id: str) -> bool:
        with storage_errors("delete assignment"):
            res = await self.col.delete_one({"assignmentId": str(assignment_id)})
        return res.deleted_count > 0

    async def ensure_indexes(self):
        await self.col.create_index("assignmentId", unique=True)
        await self.col.create_index([("teacherId", ASCENDING), ("createdAt", DESCENDING)])
        await self.col.create_index("deadline")

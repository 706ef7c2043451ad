from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class AssignmentStatus(str, Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


# I campi arrivano "grezzi": la validazione vera la fa il service,
# così gli errori vengono raccolti tutti insieme.
class AssignmentCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    subject: Optional[str] = None
    deadline: Optional[str] = None


class AssignmentUpdate(AssignmentCreate):
    status: Optional[str] = None


class Assignment(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    assignmentId: str
    title: str
    description: str
    subject: str
    deadline: datetime
    status: AssignmentStatus = AssignmentStatus.active
    teacherId: str
    createdAt: datetime
    updatedAt: datetime


class TeacherSummary(BaseModel):
    userId: str
    name: Optional[str] = None
    email: Optional[str] = None


class AssignmentView(Assignment):
    teacher: TeacherSummary


class AssignmentResponse(BaseModel):
    message: str
    assignment: AssignmentView


class AssignmentListResponse(BaseModel):
    message: str
    assignments: List[AssignmentView]


class MessageResponse(BaseModel):
    message: str

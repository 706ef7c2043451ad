import pytest
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from app.core.deps import get_repository, get_user_repository
from app.core.errors import EmailAlreadyRegistered
from app.core.security import get_password_hash
from app.schemas.assignment import Assignment
from app.schemas.context import UserContext
from app.schemas.user import User


# ------------------------- Fake repositories -------------------------
class FakeAssignmentRepo:
    def __init__(self):
        self.items: dict[str, Assignment] = {}

    async def create(self, assignment: Assignment) -> str:
        # NON genera ID: si aspetta assignment.assignmentId già valorizzato
        if not getattr(assignment, "assignmentId", None):
            raise ValueError("assignmentId must be set by the service")
        self.items[assignment.assignmentId] = assignment
        return assignment.assignmentId

    async def find_one(self, assignment_id: str):
        return self.items.get(assignment_id)

    async def find_many(self, teacher_id=None):
        items = [a for a in self.items.values() if teacher_id is None or a.teacherId == teacher_id]
        return sorted(items, key=lambda a: a.createdAt, reverse=True)

    async def update(self, assignment_id: str, fields: dict):
        current = self.items.get(assignment_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        self.items[assignment_id] = updated
        return updated

    async def delete(self, assignment_id: str):
        return self.items.pop(assignment_id, None) is not None


class FakeUserRepo:
    def __init__(self):
        self.items: dict[str, User] = {}

    async def create(self, user: User) -> str:
        if any(u.email == user.email for u in self.items.values()):
            raise EmailAlreadyRegistered()
        self.items[user.userId] = user
        return user.userId

    async def find_by_email(self, email: str):
        return next((u for u in self.items.values() if u.email == email.lower()), None)

    async def find_by_id(self, user_id: str):
        return self.items.get(user_id)

    async def find_many(self, user_ids):
        ids = set(user_ids)
        return [u for u in self.items.values() if u.userId in ids]

    def add(self, user_id: str, role: str, name: str = None, password: str = "secret1") -> User:
        user = User(
            userId=user_id,
            name=name or user_id.upper(),
            email=f"{user_id}@school.edu",
            password_hash=get_password_hash(password),
            role=role,
            createdAt=datetime.now(timezone.utc),
        )
        self.items[user_id] = user
        return user


# ------------------------------- Fixtures -------------------------------------
@pytest.fixture
def repo():
    return FakeAssignmentRepo()

@pytest.fixture
def users():
    users = FakeUserRepo()
    users.add("t1", "teacher", name="Teacher One")
    users.add("t2", "teacher", name="Teacher Two")
    users.add("s1", "student")
    return users

@pytest.fixture
def teacher():
    return UserContext(user_id="t1", role="teacher")

@pytest.fixture
def other_teacher():
    return UserContext(user_id="t2", role="teacher")

@pytest.fixture
def student():
    return UserContext(user_id="s1", role="student")


@pytest.fixture
def client(repo, users):
    # niente "with": il lifespan (connessione Mongo) non parte
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_user_repository] = lambda: users
    return TestClient(app)

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
from app.core.errors import Forbidden, NotFound, ValidationFailed
from app.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentStatus,
    AssignmentUpdate,
    AssignmentView,
    TeacherSummary,
)
from app.schemas.context import UserContext
from app.database.assignment_repo import AssignmentRepo
from app.database.user_repo import UserRepo
from app.services import access_policy

logger = logging.getLogger("assignment.service")

TEXT_FIELDS = ("title", "description", "subject")


def create_assignment_id() -> str:
    return f"as-{uuid.uuid4().hex}"


def utc_now() -> datetime:
    # Mongo salva i datetime al millisecondo: tronchiamo subito
    ts = datetime.now(timezone.utc)
    return ts.replace(microsecond=(ts.microsecond // 1000) * 1000)


def parse_deadline(value: Any) -> Optional[datetime]:
    """
    Interpreta una data ISO-8601 ("2099-01-01", "2099-01-01T00:00", "...Z").
    Le date senza fuso sono considerate UTC. Ritorna None se non valida.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _is_provided(value: Any) -> bool:
    return value is not None and value != ""


def _validate(data: Dict[str, Any], partial: bool, now: datetime) -> Tuple[Dict[str, Any], List[dict]]:
    """
    Valida i campi e ritorna (valori puliti, errori).
    In modalità partial i campi assenti, None o "" vengono ignorati.
    """
    clean: Dict[str, Any] = {}
    errors: List[dict] = []

    for field in TEXT_FIELDS:
        value = data.get(field)
        if partial and not _is_provided(value):
            continue
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            verb = "cannot be empty" if partial else "is required"
            errors.append({"field": field, "message": f"{field.capitalize()} {verb}"})
        else:
            clean[field] = text

    raw_deadline = data.get("deadline")
    if not partial or _is_provided(raw_deadline):
        deadline = parse_deadline(raw_deadline)
        if deadline is None:
            errors.append({"field": "deadline", "message": "Valid deadline date is required"})
        elif deadline <= now:
            errors.append({"field": "deadline", "message": "Deadline must be in the future"})
        else:
            clean["deadline"] = deadline

    raw_status = data.get("status")
    if partial and _is_provided(raw_status):
        allowed = [s.value for s in AssignmentStatus]
        if raw_status not in allowed:
            errors.append({"field": "status", "message": f"Status must be one of: {', '.join(allowed)}"})
        else:
            clean["status"] = raw_status

    return clean, errors


async def _to_views(assignments: Sequence[Assignment], users: UserRepo) -> List[AssignmentView]:
    # "populate" del teacher: nome ed email, mai la password
    owners = {u.userId: u for u in await users.find_many(a.teacherId for a in assignments)}
    views = []
    for a in assignments:
        owner = owners.get(a.teacherId)
        summary = TeacherSummary(
            userId=a.teacherId,
            name=owner.name if owner else None,
            email=owner.email if owner else None,
        )
        views.append(AssignmentView(**a.model_dump(), teacher=summary))
    return views


class AssignmentService:

    @staticmethod
    async def create_assignment(
        data: AssignmentCreate,
        user: UserContext,
        repo: AssignmentRepo,
        users: UserRepo,
    ) -> AssignmentView:
        if not access_policy.can_create(user.role):
            raise Forbidden("Teacher access required")

        now = utc_now()
        clean, errors = _validate(data.model_dump(), partial=False, now=now)
        if errors:
            raise ValidationFailed(errors)

        assignment = Assignment(
            assignmentId=create_assignment_id(),
            teacherId=str(user.user_id),
            status=AssignmentStatus.active,
            createdAt=now,
            updatedAt=now,
            **clean,
        )
        await repo.create(assignment)
        logger.info("Assignment %s creato da %s", assignment.assignmentId, user.user_id)

        (view,) = await _to_views([assignment], users)
        return view

    @staticmethod
    async def list_assignments(user: UserContext, repo: AssignmentRepo, users: UserRepo) -> List[AssignmentView]:
        teacher_id = access_policy.owner_scope(user.role, user.user_id)
        items = await repo.find_many(teacher_id)
        return await _to_views(items, users)

    @staticmethod
    async def get_assignment(
        assignment_id: str,
        user: UserContext,
        repo: AssignmentRepo,
        users: UserRepo,
    ) -> AssignmentView:
        doc = await repo.find_one(assignment_id)
        if doc is None:
            raise NotFound("Assignment not found")
        if not access_policy.can_view(user.role, doc.teacherId, user.user_id):
            raise Forbidden("Access denied")
        (view,) = await _to_views([doc], users)
        return view

    @staticmethod
    async def update_assignment(
        assignment_id: str,
        data: AssignmentUpdate,
        user: UserContext,
        repo: AssignmentRepo,
        users: UserRepo,
    ) -> AssignmentView:
        if not access_policy.is_teacher(user.role):
            raise Forbidden("Teacher access required")

        now = utc_now()
        clean, errors = _validate(data.model_dump(), partial=True, now=now)
        if errors:
            raise ValidationFailed(errors)

        # prima l'esistenza, poi la proprietà: un non-owner riceve 403, non 404
        doc = await repo.find_one(assignment_id)
        if doc is None:
            raise NotFound("Assignment not found")
        if not access_policy.can_modify(user.role, doc.teacherId, user.user_id):
            raise Forbidden("You can only update your own assignments")

        clean["updatedAt"] = now
        updated = await repo.update(assignment_id, clean)
        if updated is None:
            raise NotFound("Assignment not found")
        logger.info("Assignment %s aggiornato da %s (%s)", assignment_id, user.user_id, sorted(clean))

        (view,) = await _to_views([updated], users)
        return view

    @staticmethod
    async def delete_assignment(assignment_id: str, user: UserContext, repo: AssignmentRepo) -> None:
        if not access_policy.is_teacher(user.role):
            raise Forbidden("Teacher access required")

        doc = await repo.find_one(assignment_id)
        if doc is None:
            raise NotFound("Assignment not found")
        if not access_policy.can_modify(user.role, doc.teacherId, user.user_id):
            raise Forbidden("You can only delete your own assignments")

        if not await repo.delete(assignment_id):
            raise NotFound("Assignment not found")
        logger.info("Assignment %s cancellato da %s", assignment_id, user.user_id)

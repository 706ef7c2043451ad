from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Response, status

from app.schemas.assignment import (
    AssignmentCreate,
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentUpdate,
    MessageResponse,
)
from app.schemas.context import UserContext
from app.database.assignment_repo import AssignmentRepo
from app.database.user_repo import UserRepo
from app.core.deps import get_repository, get_user_repository

from app.services.auth_service import AuthService
from app.services.assignment_service import AssignmentService


router = APIRouter()

RepoDep = Annotated[AssignmentRepo, Depends(get_repository)]
UsersDep = Annotated[UserRepo, Depends(get_user_repository)]
UserDep = Annotated[UserContext, Depends(AuthService.get_current_user)]


@router.post("/assignments", status_code=status.HTTP_201_CREATED, response_model=AssignmentResponse)
async def create_assignment_endpoint(
    assignment: AssignmentCreate,
    user: UserDep,
    repo: RepoDep,
    users: UsersDep,
    response: Response,
):
    created = await AssignmentService.create_assignment(assignment, user, repo, users)
    response.headers["Location"] = f"/api/v1/assignments/{created.assignmentId}"
    return {"message": "Assignment created successfully", "assignment": created}


@router.get("/assignments", response_model=AssignmentListResponse)
async def list_assignments_endpoint(
    user: UserDep,
    repo: RepoDep,
    users: UsersDep,
):
    items = await AssignmentService.list_assignments(user, repo, users)
    return {"message": "Assignments retrieved successfully", "assignments": items}


@router.get("/assignments/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment_endpoint(
    assignment_id: str,
    user: UserDep,
    repo: RepoDep,
    users: UsersDep,
):
    result = await AssignmentService.get_assignment(assignment_id, user, repo, users)
    return {"message": "Assignment retrieved successfully", "assignment": result}


@router.put("/assignments/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment_endpoint(
    assignment_id: str,
    user: UserDep,
    repo: RepoDep,
    users: UsersDep,
    changes: Optional[AssignmentUpdate] = None,
):
    updated = await AssignmentService.update_assignment(assignment_id, changes or AssignmentUpdate(), user, repo, users)
    return {"message": "Assignment updated successfully", "assignment": updated}


@router.delete("/assignments/{assignment_id}", response_model=MessageResponse)
async def delete_assignment_endpoint(
    assignment_id: str,
    user: UserDep,
    repo: RepoDep,
):
    await AssignmentService.delete_assignment(assignment_id, user, repo)
    return {"message": "Assignment deleted successfully"}

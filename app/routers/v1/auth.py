from typing import Annotated
from fastapi import APIRouter, Depends, status

from app.schemas.context import UserContext
from app.schemas.user import TokenResponse, UserCreate, UserLogin, UserPublic
from app.database.user_repo import UserRepo
from app.core.deps import get_user_repository
from app.services.auth_service import AuthService


router = APIRouter()

UsersDep = Annotated[UserRepo, Depends(get_user_repository)]
UserDep = Annotated[UserContext, Depends(AuthService.get_current_user)]


@router.post("/auth/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
async def register_endpoint(data: UserCreate, users: UsersDep):
    token, user = await AuthService.register(data, users)
    return TokenResponse(message="User registered successfully", token=token, user=user)


@router.post("/auth/login", response_model=TokenResponse)
async def login_endpoint(data: UserLogin, users: UsersDep):
    token, user = await AuthService.login(data, users)
    return TokenResponse(message="Login successful", token=token, user=user)


@router.get("/auth/me", response_model=UserPublic)
async def me_endpoint(user: UserDep, users: UsersDep):
    return await AuthService.get_profile(user, users)

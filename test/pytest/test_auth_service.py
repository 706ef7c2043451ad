import pytest

from app.core.errors import EmailAlreadyRegistered, InvalidCredential, InvalidLogin, ValidationFailed
from app.core.security import create_access_token
from app.schemas.user import UserCreate, UserLogin
from app.services.auth_service import AuthService


def _register(**overrides):
    base = dict(name="Ada", email="Ada@School.edu", password="secret1", role="teacher")
    base.update(overrides)
    return UserCreate(**base)


@pytest.mark.asyncio
async def test_register_ok(users):
    token, user = await AuthService.register(_register(), users)
    assert token
    assert user.email == "ada@school.edu"
    assert user.role == "teacher"
    assert "password_hash" not in user.model_dump()
    stored = await users.find_by_id(user.userId)
    assert stored.password_hash != "secret1"

@pytest.mark.asyncio
async def test_register_collects_errors(users):
    with pytest.raises(ValidationFailed) as exc:
        await AuthService.register(UserCreate(name=" ", email="nope", password="123", role="admin"), users)
    assert {e["field"] for e in exc.value.errors} == {"name", "email", "password", "role"}

@pytest.mark.asyncio
async def test_register_duplicate_email(users):
    await AuthService.register(_register(), users)
    with pytest.raises(EmailAlreadyRegistered):
        await AuthService.register(_register(email="ada@school.edu"), users)

@pytest.mark.asyncio
async def test_login(users):
    await AuthService.register(_register(role="student"), users)
    token, user = await AuthService.login(UserLogin(email="ADA@school.edu", password="secret1"), users)
    context = await AuthService.resolve_token(token, users)
    assert context.user_id == user.userId
    assert context.role == "student"

@pytest.mark.asyncio
@pytest.mark.parametrize("email, password", [("ada@school.edu", "wrong1"), ("ghost@school.edu", "secret1")])
async def test_login_invalid(users, email, password):
    await AuthService.register(_register(), users)
    with pytest.raises(InvalidLogin):
        await AuthService.login(UserLogin(email=email, password=password), users)

@pytest.mark.asyncio
async def test_login_missing_fields(users):
    with pytest.raises(ValidationFailed):
        await AuthService.login(UserLogin(), users)

@pytest.mark.asyncio
async def test_token_for_deleted_user_is_invalid(users):
    token = create_access_token("us-ghost", "teacher")
    with pytest.raises(InvalidCredential):
        await AuthService.resolve_token(token, users)

@pytest.mark.asyncio
async def test_role_comes_from_database(users):
    # il ruolo nel token non conta: fa fede l'utente salvato
    token = create_access_token("s1", "teacher")
    context = await AuthService.resolve_token(token, users)
    assert context.role == "student"

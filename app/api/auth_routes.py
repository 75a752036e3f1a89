"""Pipeboard — Auth Routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_auth_service, get_current_user, get_sessions, get_token
from app.auth.service import AuthService, SessionRegistry
from app.core.errors import AuthenticationError, ValidationError
from app.models.sales_models import User
from app.core.logging import get_logger

logger = get_logger("api.auth")

router = APIRouter(prefix="/auth", tags=["Auth"])


# ── Request / Response Models ──


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    status: str = "success"
    token: str
    user: User


class PasswordChangeRequest(BaseModel):
    """Request body for POST /auth/password."""

    new_password: str
    confirm_password: str


# ── Endpoints ──


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
    registry: SessionRegistry = Depends(get_sessions),
):
    """Resolve the credentials and open a session."""
    try:
        user = auth.login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponse(token=registry.open(user), user=user)


@router.post("/logout")
async def logout(
    token: str = Depends(get_token),
    registry: SessionRegistry = Depends(get_sessions),
):
    registry.close(token)
    return {"status": "success"}


@router.post("/password")
async def change_password(
    request: PasswordChangeRequest,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    """Override the current user's password."""
    try:
        auth.change_password(user.id, request.new_password, request.confirm_password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success"}

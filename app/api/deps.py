"""Pipeboard — Shared Route Dependencies."""

from typing import List, Optional

from fastapi import Depends, Header, HTTPException

from app.auth.service import AuthService, SessionRegistry
from app.core.roster import load_roster
from app.database import engine
from app.models.sales_models import TeamMember, User
from app.services.record_store import RecordStore, SQLRecordStore

_store: Optional[RecordStore] = None
sessions = SessionRegistry()


def get_store() -> RecordStore:
    global _store
    if _store is None:
        _store = SQLRecordStore(engine)
    return _store


def get_roster() -> List[TeamMember]:
    return load_roster()


def get_sessions() -> SessionRegistry:
    return sessions


def get_auth_service(
    store: RecordStore = Depends(get_store),
    roster: List[TeamMember] = Depends(get_roster),
) -> AuthService:
    return AuthService(store, roster)


def get_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the bearer token from the Authorization header."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token.")
    return authorization.split(" ", 1)[1].strip()


def get_current_user(
    token: str = Depends(get_token),
    registry: SessionRegistry = Depends(get_sessions),
) -> User:
    user = registry.resolve(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Session expired or invalid.")
    return user


def require_member(user: User = Depends(get_current_user)) -> User:
    """Reject writes from the admin, whose view is a read-only union."""
    if user.is_admin:
        raise HTTPException(
            status_code=403,
            detail="The team view is read-only; sign in as a member to edit.",
        )
    return user

"""Pipeboard — Team Roster.

The roster is configuration (``settings.team_roster``), not code.
"""

from typing import List, Optional

from app.config import settings
from app.models.sales_models import TeamMember


def load_roster(entries: Optional[List[dict]] = None) -> List[TeamMember]:
    """Parse roster entries, defaulting to the configured team."""
    raw = settings.team_roster if entries is None else entries
    return [TeamMember(**entry) for entry in raw]


def find_member_by_email(roster: List[TeamMember], email: str) -> Optional[TeamMember]:
    """Case-insensitive email lookup."""
    needle = (email or "").strip().lower()
    return next((m for m in roster if m.email.lower() == needle), None)


def find_member_by_id(roster: List[TeamMember], user_id: str) -> Optional[TeamMember]:
    return next((m for m in roster if m.id == user_id), None)

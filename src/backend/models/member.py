"""
Member rows.

- coop_members: cooperative member profile, keyed by the auth user id
"""

from typing import Optional

from models.base import TableRow


class AuthUser(TableRow):
    """Authenticated user as reported by Supabase auth."""

    id: str
    email: Optional[str] = None


class CoopMember(TableRow):
    """Row of the coop_members table."""

    id: str
    name: Optional[str] = None

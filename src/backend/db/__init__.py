"""Supabase access module."""

from db.supabase_session import close_client, create_user_client

__all__ = ["create_user_client", "close_client"]

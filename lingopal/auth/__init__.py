"""Authentication module exports."""

from lingopal.auth.dependencies import CurrentUserId, ensure_same_user, get_current_user_id


__all__ = [
    "CurrentUserId",
    "ensure_same_user",
    "get_current_user_id",
]

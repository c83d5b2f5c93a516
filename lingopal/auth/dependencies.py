"""FastAPI authentication dependencies."""

import logging
from typing import Annotated

from fastapi import Depends, Request

from lingopal.auth.exceptions import InvalidTokenError, MissingTokenError
from lingopal.auth.security import decode_access_token
from lingopal.middleware.error_handlers import AuthorizationError


logger = logging.getLogger(__name__)


def _extract_token_from_request(request: Request) -> str | None:
    """Extract the bearer token from the Authorization header."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_current_user_id(request: Request) -> int:
    """Resolve the authenticated user id from the bearer token.

    Raises
    ------
    MissingTokenError
        No bearer token was sent (401).
    InvalidTokenError
        Token is malformed, expired, or its subject is not a user id (403).
    """
    token = _extract_token_from_request(request)
    if not token:
        raise MissingTokenError

    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Token subject is not a user id")
        raise InvalidTokenError from e

    request.state.user_id = user_id
    return user_id


def ensure_same_user(current_user_id: int, user_id: int) -> None:
    """Reject requests that act on another user's records."""
    if current_user_id != user_id:
        msg = "Token does not belong to the requested user"
        raise AuthorizationError(msg)


# Usage: async def my_route(user_id: CurrentUserId) -> Response:
CurrentUserId = Annotated[int, Depends(get_current_user_id)]

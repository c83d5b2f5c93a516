from fastapi import APIRouter, Depends, Query, status

from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit, auth_route_limit
from lingopal.users.schemas import (
    MessageResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserPublic,
    UserStatusResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)
from lingopal.users.service import UserService


router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(api_route_limit)])


@router.get("")
async def list_users(
    session: DbSession,
    email: str | None = Query(default=None, description="Filter users by email"),
) -> list[UserPublic]:
    """Retrieve users, optionally filtered by e-mail."""
    users = await UserService(session).list_users(email)
    return [UserPublic.model_validate(user) for user in users]


@router.get("/status")
async def get_user_status(
    session: DbSession,
    user_id: int = Query(..., gt=0, description="User whose total points and level to fetch"),
) -> list[UserStatusResponse]:
    """Retrieve a user's total points and level."""
    rows = await UserService(session).get_status(user_id)
    return [UserStatusResponse.model_validate(row) for row in rows]


@router.post("/signup", dependencies=[Depends(auth_route_limit)])
async def sign_up(data: SignUpRequest, session: DbSession) -> SignUpResponse:
    """Register a new user."""
    user = await UserService(session).sign_up(data)
    return SignUpResponse(data=UserPublic.model_validate(user))


@router.post("/signin", dependencies=[Depends(auth_route_limit)])
async def sign_in(data: SignInRequest, session: DbSession) -> SignInResponse:
    """Sign in and receive a bearer token."""
    user, token = await UserService(session).sign_in(data.email, data.password)
    return SignInResponse(user=UserPublic.model_validate(user), token=token)


@router.post("/update")
async def update_user(data: UserUpdateRequest, session: DbSession) -> UserUpdateResponse:
    """Update a user's profile."""
    user = await UserService(session).update_user(data)
    return UserUpdateResponse(body=UserPublic.model_validate(user))


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
async def delete_user(user_id: int, session: DbSession) -> MessageResponse:
    """Delete a user."""
    await UserService(session).delete_user(user_id)
    return MessageResponse(message="User deleted successfully.")

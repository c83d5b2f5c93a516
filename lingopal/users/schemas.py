from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class UserPublic(BaseModel):
    """User fields safe to return to clients."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str
    email: str
    phone_number: str | None = None
    birth_date: date | None = None
    gender: str | None = None
    image: str | None = None


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    phone_number: str | None = None
    birth_date: date | None = None
    gender: str | None = None


class SignUpResponse(BaseModel):
    message: str = "User signed up successfully."
    data: UserPublic


class SignInRequest(BaseModel):
    email: str
    password: str


class SignInResponse(BaseModel):
    message: str = "User signed in successfully."
    user: UserPublic
    token: str


class UserUpdateRequest(BaseModel):
    """Profile fields a user may change; omitted fields are left untouched."""

    user_id: int = Field(..., gt=0)
    name: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    birth_date: date | None = None


class UserUpdateResponse(BaseModel):
    message: str = "User updated successfully."
    body: UserPublic


class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class LevelBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_level_name: str
    user_level_code: str


class UserStatusResponse(BaseModel):
    """Aggregate progress of a user with their current level."""

    model_config = ConfigDict(from_attributes=True)

    progress_id: int
    progress_course_id: int | None = None
    total_poin: float
    user_id: int
    user: UserBrief | None = None
    level: LevelBrief | None = None


class MessageResponse(BaseModel):
    message: str

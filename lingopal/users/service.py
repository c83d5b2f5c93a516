import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopal.auth.exceptions import InvalidCredentialsError
from lingopal.auth.security import create_access_token, get_password_hash, verify_password
from lingopal.exceptions import ResourceNotFoundError, ValidationError
from lingopal.users.models import User, UserProgress
from lingopal.users.schemas import SignUpRequest, UserUpdateRequest


logger = logging.getLogger(__name__)


class UserService:
    """Service for handling user operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_users(self, email: str | None = None) -> list[User]:
        """List users, optionally restricted to one e-mail address."""
        query = select(User).order_by(User.user_id)
        if email:
            query = query.where(User.email == email)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def get_status(self, user_id: int) -> list[UserProgress]:
        """Get the aggregate progress rows (total points, level) for a user."""
        query = select(UserProgress).where(UserProgress.user_id == user_id)
        result = await self._session.execute(query)
        return list(result.scalars().unique().all())

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(User).where(User.email == email).limit(1))
        return result.scalar_one_or_none()

    async def sign_up(self, data: SignUpRequest) -> User:
        """
        Register a new user.

        Raises
        ------
        ValidationError
            If the e-mail is already registered
        """
        if await self.get_user_by_email(data.email) is not None:
            msg = "User already exists."
            raise ValidationError(msg)

        user = User(**data.model_dump(exclude={"password"}), password=get_password_hash(data.password))
        self._session.add(user)

        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            msg = "User already exists."
            raise ValidationError(msg)

        logger.info("Created user with ID: %s", user.user_id)
        return user

    async def sign_in(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue an access token.

        Legacy password hashes are re-hashed with the current algorithm on a
        successful sign-in.

        Raises
        ------
        InvalidCredentialsError
            If the e-mail is unknown or the password does not match
        """
        user = await self.get_user_by_email(email)
        if user is None:
            raise InvalidCredentialsError

        verified, updated_hash = verify_password(password, user.password)
        if not verified:
            raise InvalidCredentialsError

        if updated_hash:
            user.password = updated_hash
            await self._session.commit()
            logger.info("Upgraded password hash for user %s", user.user_id)

        return user, create_access_token(user.user_id)

    async def get_user(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises
        ------
        ResourceNotFoundError
            If user not found
        """
        user = await self._session.get(User, user_id)
        if not user:
            msg = "User"
            raise ResourceNotFoundError(msg, str(user_id))
        return user

    async def update_user(self, data: UserUpdateRequest) -> User:
        """Update the profile fields that were sent."""
        user = await self.get_user(data.user_id)

        for key, value in data.model_dump(exclude_unset=True, exclude={"user_id"}).items():
            setattr(user, key, value)

        await self._session.commit()
        return user

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self._session.delete(user)
        await self._session.commit()
        logger.info("Deleted user %s", user_id)

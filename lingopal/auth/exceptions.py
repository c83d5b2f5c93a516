"""Authentication-specific exceptions."""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Base authentication error."""

    def __init__(self, detail: str = "Authentication failed", status_code: int = status.HTTP_401_UNAUTHORIZED) -> None:
        super().__init__(status_code=status_code, detail=detail)


class MissingTokenError(AuthenticationError):
    """No bearer token on the request."""

    def __init__(self) -> None:
        super().__init__(detail="Access denied. Token not provided.")


class InvalidTokenError(AuthenticationError):
    """Token failed signature or claim validation."""

    def __init__(self, detail: str = "Invalid token.") -> None:
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class TokenExpiredError(InvalidTokenError):
    """Token has expired."""

    def __init__(self) -> None:
        super().__init__(detail="Token has expired.")


class InvalidCredentialsError(AuthenticationError):
    """Invalid credentials provided."""

    def __init__(self) -> None:
        super().__init__(detail="Unauthorized, incorrect email or password.")

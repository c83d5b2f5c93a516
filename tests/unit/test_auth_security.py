from datetime import timedelta

import jwt
import pytest

from lingopal.auth.exceptions import InvalidTokenError, TokenExpiredError
from lingopal.auth.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_token_round_trip_carries_subject_as_string() -> None:
    payload = decode_access_token(create_access_token(42))

    assert payload["sub"] == "42"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected() -> None:
    token = create_access_token(42, expires_delta=timedelta(seconds=-5))

    with pytest.raises(TokenExpiredError):
        decode_access_token(token)


def test_token_signed_with_another_secret_is_rejected() -> None:
    token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm="HS256")

    with pytest.raises(InvalidTokenError) as exc_info:
        decode_access_token(token)

    assert exc_info.value.status_code == 403


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(InvalidTokenError):
        decode_access_token("not-a-jwt")


def test_password_hash_verifies_only_the_original_password() -> None:
    hashed = get_password_hash("hunter22")

    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)[0] is True
    assert verify_password("hunter23", hashed)[0] is False

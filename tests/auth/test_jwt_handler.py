from datetime import datetime, timedelta, timezone

import jwt
import pytest

from student_portal.auth.jwt_handler import (
    TokenExpired,
    TokenMalformed,
    TokenSignatureMismatch,
    create_access_token,
    decode_access_token,
)
from student_portal.core.config import Settings

SETTINGS = Settings(jwt_secret_key='unit-secret')


def test_create_access_token_embeds_email_and_one_hour_expiry() -> None:
    token = create_access_token(SETTINGS, 'ada@example.com')

    payload = decode_access_token(SETTINGS, token)

    assert payload['email'] == 'ada@example.com'
    assert payload['exp'] - payload['iat'] == 3600


def test_decode_access_token_rejects_expired_token() -> None:
    token = create_access_token(SETTINGS, 'ada@example.com', expires_minutes=-1)

    with pytest.raises(TokenExpired) as exception_info:
        decode_access_token(SETTINGS, token)

    assert exception_info.value.reason == 'expired'


def test_decode_access_token_rejects_token_signed_with_other_secret() -> None:
    token = create_access_token(Settings(jwt_secret_key='someone-else'), 'ada@example.com')

    with pytest.raises(TokenSignatureMismatch):
        decode_access_token(SETTINGS, token)


@pytest.mark.parametrize('token', ['not-a-token', '', 'a.b.c'])
def test_decode_access_token_rejects_malformed_token(token: str) -> None:
    with pytest.raises(TokenMalformed):
        decode_access_token(SETTINGS, token)


def test_decode_access_token_requires_expiry() -> None:
    token = jwt.encode({'email': 'ada@example.com'}, 'unit-secret', algorithm='HS256')

    with pytest.raises(TokenMalformed):
        decode_access_token(SETTINGS, token)


def test_decode_access_token_requires_email_claim() -> None:
    expire = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({'exp': expire}, 'unit-secret', algorithm='HS256')

    with pytest.raises(TokenMalformed):
        decode_access_token(SETTINGS, token)

from datetime import datetime, timedelta, timezone

import jwt

from student_portal.core.config import Settings


class TokenVerificationError(Exception):
    reason = "invalid"


class TokenExpired(TokenVerificationError):
    reason = "expired"


class TokenMalformed(TokenVerificationError):
    reason = "malformed"


class TokenSignatureMismatch(TokenVerificationError):
    reason = "signature_mismatch"


def create_access_token(settings: Settings, email: str, expires_minutes: int | None = None) -> str:
    expire_minutes = settings.jwt_expires_minutes if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired(str(exc)) from exc
    except jwt.InvalidSignatureError as exc:
        raise TokenSignatureMismatch(str(exc)) from exc
    except jwt.PyJWTError as exc:
        raise TokenMalformed(str(exc)) from exc

    if not payload.get("email"):
        raise TokenMalformed("Token has no email claim")
    return payload

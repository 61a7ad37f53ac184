from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from student_portal.auth import jwt_handler
from student_portal.core.config import Settings, get_settings
from student_portal.core.errors import AuthenticationFailed

AUTH_COOKIE_NAME = "jwt"

cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)


def get_current_identity(
    request: Request,
    token: str | None = Depends(cookie_scheme),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not token:
        raise AuthenticationFailed("missing")

    try:
        payload = jwt_handler.decode_access_token(settings, token)
    except jwt_handler.TokenVerificationError as exc:
        raise AuthenticationFailed(exc.reason) from exc

    request.state.user = payload
    return payload

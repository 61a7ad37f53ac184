import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, field_validator

from student_portal.auth import jwt_handler
from student_portal.auth.dependencies import AUTH_COOKIE_NAME
from student_portal.auth.passwords import dummy_verify, hash_password, verify_password
from student_portal.core.config import Settings, get_settings
from student_portal.core.errors import AuthenticationFailed, StoreFailure
from student_portal.core.validation import check_password, lowercase_email, parse_model, sanitize_text, strip_input
from student_portal.routes.forms import read_payload
from student_portal.store import RecordStore, StoreWriteFailed, get_store

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return sanitize_text(value, 'Name')

    @field_validator('email', mode='before')
    @classmethod
    def strip_email(cls, value):
        return strip_input(value)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return lowercase_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(payload: dict = Depends(read_payload), store: RecordStore = Depends(get_store)):
    data = parse_model(RegisterRequest, payload)

    try:
        store.create_user(name=data.name, email=data.email, password_hash=hash_password(data.password))
    except StoreWriteFailed as exc:
        raise StoreFailure('Error saving user.') from exc

    return {'message': 'User registered successfully!'}


@router.post('/login')
def login(
    response: Response,
    payload: dict = Depends(read_payload),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    email = str(payload.get('email') or '').strip().lower()
    password = str(payload.get('password') or '')

    user = store.find_user_by_email(email) if email else None
    if user is None:
        dummy_verify()
        raise AuthenticationFailed('unknown email')
    if not verify_password(password, user.password):
        raise AuthenticationFailed('password mismatch')

    token = jwt_handler.create_access_token(settings, user.email)
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=settings.auth_cookie_max_age,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite='lax',
    )
    logger.info('User id=%s logged in', user.id)
    return {'message': 'Login successful', 'token': token}


@router.get('/logout')
def logout():
    response = RedirectResponse(url='/', status_code=status.HTTP_302_FOUND)
    response.delete_cookie(AUTH_COOKIE_NAME, httponly=True, samesite='lax')
    return response

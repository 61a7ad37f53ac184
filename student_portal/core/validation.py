"""Field sanitizers shared by the registration and student forms.

Text is trimmed and HTML-escaped before it is stored; emails are trimmed
before ``EmailStr`` checks them and lowercased afterwards.
"""
import html
import re

from pydantic import BaseModel, ValidationError

from student_portal.core.errors import ValidationFailed, pydantic_errors_to_list

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
MIN_PASSWORD_LENGTH = 6


def sanitize_text(value: str, field_label: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field_label} is required.")
    return html.escape(normalized, quote=True)


def strip_input(value):
    return value.strip() if isinstance(value, str) else value


def lowercase_email(value: str) -> str:
    return value.lower()


def parse_integer(value, field_label: str) -> int:
    # bool is an int subclass; True must not become 1.
    if isinstance(value, bool):
        raise ValueError(f"{field_label} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value):
        return int(value)
    raise ValueError(f"{field_label} must be an integer.")


def check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    return value.strip()


def parse_model(model: type[BaseModel], payload: dict):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed(pydantic_errors_to_list(exc.errors())) from exc

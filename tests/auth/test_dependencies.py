from types import SimpleNamespace

import pytest

from student_portal.auth.dependencies import get_current_identity
from student_portal.auth.jwt_handler import create_access_token
from student_portal.core.config import Settings
from student_portal.core.errors import AuthenticationFailed

SETTINGS = Settings(jwt_secret_key='gate-secret')


def _fake_request():
    return SimpleNamespace(state=SimpleNamespace())


def _reason_for(token: str | None) -> str:
    with pytest.raises(AuthenticationFailed) as exception_info:
        get_current_identity(request=_fake_request(), token=token, settings=SETTINGS)
    return exception_info.value.reason


def test_gate_rejects_missing_cookie() -> None:
    assert _reason_for(None) == 'missing'


def test_gate_keeps_expired_reason_internally() -> None:
    token = create_access_token(SETTINGS, 'ada@example.com', expires_minutes=-5)

    assert _reason_for(token) == 'expired'


def test_gate_keeps_signature_mismatch_reason_internally() -> None:
    token = create_access_token(Settings(jwt_secret_key='forged'), 'ada@example.com')

    assert _reason_for(token) == 'signature_mismatch'


def test_gate_keeps_malformed_reason_internally() -> None:
    assert _reason_for('garbage') == 'malformed'


def test_gate_attaches_identity_to_request_state() -> None:
    request = _fake_request()
    token = create_access_token(SETTINGS, 'ada@example.com')

    identity = get_current_identity(request=request, token=token, settings=SETTINGS)

    assert identity['email'] == 'ada@example.com'
    assert request.state.user is identity

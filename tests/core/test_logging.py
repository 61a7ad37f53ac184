import logging

from student_portal.core.logging import SecretRedactionFilter
from student_portal.main import create_app


def _redaction_filters(handler: logging.Handler) -> list:
    return [existing for existing in handler.filters if isinstance(existing, SecretRedactionFilter)]


def test_create_app_configures_logging(settings, monkeypatch) -> None:
    levels = []
    monkeypatch.setattr('student_portal.main.configure_logging', levels.append)

    create_app(settings)

    assert levels == [settings.log_level]


def test_create_app_attaches_one_redaction_filter_per_handler(settings) -> None:
    create_app(settings)
    create_app(settings)

    handlers = logging.getLogger().handlers
    assert handlers
    for handler in handlers:
        assert len(_redaction_filters(handler)) == 1

import pytest
from fastapi.testclient import TestClient

from student_portal.core.config import Settings
from student_portal.database import build_engine, build_session_factory, init_schema
from student_portal.main import create_app
from student_portal.store import RecordStore


@pytest.fixture
def settings() -> Settings:
    return Settings(app_env='test', database_url='sqlite://', jwt_secret_key='test-secret')


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client) -> dict:
    credentials = {'email': 'grace@example.com', 'password': 'hopper42'}
    response = client.post('/register', data={'name': 'Grace', **credentials})
    assert response.status_code == 201
    return credentials


@pytest.fixture
def auth_client(client, registered_user):
    response = client.post('/login', data=registered_user)
    assert response.status_code == 200
    return client


@pytest.fixture
def app_store(app):
    db = app.state.session_factory()
    try:
        yield RecordStore(db)
    finally:
        db.close()


@pytest.fixture
def db_session():
    engine = build_engine('sqlite://')
    init_schema(engine)
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()

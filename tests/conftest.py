"""Pytest configuration and shared fixtures for the portfolio app."""

import pytest

from app import create_app
from utils.security import hash_password

OWNER_PASSWORD = 'owner-secret'


@pytest.fixture
def app():
    """Create application for testing (memory storage)."""
    app = create_app('testing')
    yield app


@pytest.fixture
def db_app():
    """Create application backed by in-memory SQLite."""
    app = create_app('testing', test_config={'STORAGE_BACKEND': 'database'})
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def storage(app):
    """Storage backend inside an application context."""
    with app.app_context():
        yield app.extensions['storage']


@pytest.fixture
def make_user(app):
    """Factory creating users directly in storage."""
    def _make_user(username, password=OWNER_PASSWORD, **fields):
        record = {
            'username': username,
            'password_hash': hash_password(password),
            'name': fields.pop('name', username.title()),
            'title': fields.pop('title', 'Developer'),
            'short_bio': fields.pop('short_bio', 'Short bio'),
            'bio': fields.pop('bio', 'Long bio'),
        }
        record.update(fields)
        with app.app_context():
            return app.extensions['storage'].create_user(record)
    return _make_user


@pytest.fixture
def owner(make_user):
    """Portfolio owner, always the first user (id 1)."""
    return make_user('owner', name='Jane Owner', title='Full Stack Developer',
                     email='jane@example.com', location='Berlin')


@pytest.fixture
def auth_client(client, owner):
    """Test client logged in as the owner."""
    response = client.post('/api/login', json={'username': 'owner', 'password': OWNER_PASSWORD})
    assert response.status_code == 200
    return client

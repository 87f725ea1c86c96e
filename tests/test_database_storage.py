"""DatabaseStorage against in-memory SQLite."""

import pytest

from storage import DatabaseStorage, DuplicateError


@pytest.fixture
def db_storage(db_app):
    with db_app.app_context():
        storage = db_app.extensions['storage']
        assert isinstance(storage, DatabaseStorage)
        yield storage


@pytest.fixture
def user(db_storage):
    return db_storage.create_user({
        'username': 'alice', 'password_hash': 'x', 'name': 'Alice', 'title': 'Engineer'
    })


def test_user_round_trip(db_storage, user):
    assert user['id'] == 1
    assert user['bio'] == ''
    assert db_storage.get_user_by_username('alice')['name'] == 'Alice'
    assert db_storage.count_users() == 1


def test_duplicate_username(db_storage, user):
    with pytest.raises(DuplicateError):
        db_storage.create_user({'username': 'alice', 'password_hash': 'y', 'name': 'A', 'title': 'T'})
    # Session is usable after the rollback
    assert db_storage.count_users() == 1


def test_project_crud(db_storage, user):
    project = db_storage.create_project({
        'title': 'A', 'description': 'a', 'tags': ['flask', 'sql'], 'user_id': user['id']
    })
    assert project['tags'] == ['flask', 'sql']
    assert project['status'] == 'draft'
    assert project['featured'] is False

    updated = db_storage.update_project(project['id'], {'title': 'B', 'user_id': 999})
    assert updated['title'] == 'B'
    assert updated['user_id'] == user['id']
    assert updated['updated_at'] >= project['updated_at']

    assert db_storage.delete_project(project['id']) is True
    assert db_storage.get_project(project['id']) is None
    assert db_storage.delete_project(project['id']) is False


def test_ids_not_reused_after_delete(db_storage, user):
    first = db_storage.create_project({'title': 'A', 'description': 'a', 'user_id': user['id']})
    db_storage.delete_project(first['id'])
    second = db_storage.create_project({'title': 'B', 'description': 'b', 'user_id': user['id']})
    assert second['id'] == first['id'] + 1


def test_skill_unique_per_owner(db_storage, user):
    other = db_storage.create_user({'username': 'bob', 'password_hash': 'y', 'name': 'Bob', 'title': 'T'})
    db_storage.create_skill({'name': 'Python', 'percentage': 90, 'category': 'backend', 'user_id': user['id']})
    db_storage.create_skill({'name': 'Python', 'percentage': 60, 'category': 'backend', 'user_id': other['id']})

    with pytest.raises(DuplicateError):
        db_storage.create_skill({'name': 'Python', 'percentage': 10, 'category': 'backend', 'user_id': user['id']})

    assert [s['name'] for s in db_storage.get_skills_by_category(user['id'], 'backend')] == ['Python']


def test_messages_and_settings(db_storage, user):
    message = db_storage.create_message({
        'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello',
        'message': 'Hello there!', 'user_id': user['id']
    })
    assert message['read'] is False
    assert db_storage.mark_message_as_read(message['id'])['read'] is True
    assert db_storage.mark_message_as_read(999) is None

    assert db_storage.get_settings(user['id']) is None
    settings = db_storage.update_settings(user['id'], {'data': {'theme': 'dark'}})
    assert settings['data'] == {'theme': 'dark'}
    settings = db_storage.update_settings(user['id'], {'data': {'theme': 'light'}})
    assert db_storage.get_settings(user['id'])['data'] == {'theme': 'light'}
    assert settings['id'] == db_storage.get_settings(user['id'])['id']


def test_api_over_database_backend(db_app):
    client = db_app.test_client()
    response = client.post('/api/register', json={
        'username': 'alice', 'password': 'secret123', 'name': 'Alice', 'title': 'Engineer'
    })
    assert response.status_code == 201

    response = client.post('/api/skills', json={'name': 'SQL', 'percentage': 75, 'category': 'database'})
    assert response.status_code == 201
    response = client.post('/api/skills', json={'name': 'SQL', 'percentage': 75, 'category': 'database'})
    assert response.status_code == 409

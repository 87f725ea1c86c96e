"""Request schema validation."""

import pytest
from pydantic import ValidationError

from schemas import (
    LoginRequest,
    MessageCreate,
    ProfileUpdate,
    ProjectCreate,
    ProjectUpdate,
    RegisterRequest,
    SettingsUpdate,
    SkillCreate,
    SkillUpdate,
)
from utils.helpers import format_validation_errors


def _fields(exc_info):
    return {error['field'] for error in format_validation_errors(exc_info.value)}


def test_login_request_lengths():
    with pytest.raises(ValidationError) as exc_info:
        LoginRequest.model_validate({'username': 'ab', 'password': '123'})
    assert _fields(exc_info) == {'username', 'password'}


def test_register_request_strips_and_defaults():
    payload = RegisterRequest.model_validate({
        'username': '  alice ', 'password': 'secret123', 'name': ' Alice ', 'title': 'Engineer'
    })
    assert payload.username == 'alice'
    assert payload.name == 'Alice'
    assert payload.short_bio == ''
    assert payload.bio == ''


def test_register_request_username_characters():
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest.model_validate({
            'username': 'al ice', 'password': 'secret123', 'name': 'Alice', 'title': 'Engineer'
        })
    assert _fields(exc_info) == {'username'}


def test_profile_update_drops_credentials_and_unset_fields():
    record = ProfileUpdate.model_validate({
        'username': 'hacker', 'password': 'x', 'name': 'New Name', 'github': '  '
    }).to_record()
    assert record == {'name': 'New Name', 'github': None}


def test_profile_update_rejects_null_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        ProfileUpdate.model_validate({'name': None, 'bio': None})
    assert _fields(exc_info) == {'name', 'bio'}
    messages = {e['message'] for e in format_validation_errors(exc_info.value)}
    assert messages == {'may not be null'}


def test_profile_update_checks_email():
    with pytest.raises(ValidationError):
        ProfileUpdate.model_validate({'email': 'not-an-email'})
    assert ProfileUpdate.model_validate({'email': ''}).to_record() == {'email': None}


def test_project_create_normalizes_input():
    record = ProjectCreate.model_validate({
        'title': ' Portfolio ',
        'description': 'My site',
        'tags': 'flask, python,, ',
        'type': 'WEB',
        'status': 'Live',
        'featured': 'on',
        'live_link': '',
        'user_id': 42,
        'id': 7,
    }).to_record()

    assert record['title'] == 'Portfolio'
    assert record['tags'] == ['flask', 'python']
    assert record['type'] == 'web'
    assert record['status'] == 'live'
    assert record['featured'] is True
    assert record['live_link'] is None
    assert 'user_id' not in record
    assert 'id' not in record


def test_project_create_defaults():
    record = ProjectCreate.model_validate({'title': 'A', 'description': 'B'}).to_record()
    assert record['status'] == 'draft'
    assert record['featured'] is False
    assert record['tags'] == []
    assert record['type'] is None


def test_project_create_requires_title_and_description():
    with pytest.raises(ValidationError) as exc_info:
        ProjectCreate.model_validate({'title': '   ', 'tags': ['x']})
    assert _fields(exc_info) == {'title', 'description'}


def test_project_create_rejects_unknown_status():
    with pytest.raises(ValidationError) as exc_info:
        ProjectCreate.model_validate({'title': 'A', 'description': 'B', 'status': 'finished'})
    assert _fields(exc_info) == {'status'}


def test_project_update_is_partial():
    assert ProjectUpdate.model_validate({'title': 'X'}).to_record() == {'title': 'X'}
    assert ProjectUpdate.model_validate({'tags': ['a', ' ', 'b']}).to_record() == {'tags': ['a', 'b']}


def test_project_update_rejects_null_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        ProjectUpdate.model_validate({'title': None, 'status': None})
    assert _fields(exc_info) == {'title', 'status'}


def test_skill_create_coerces_and_lowercases():
    record = SkillCreate.model_validate({'name': 'React', 'percentage': '85', 'category': 'Frontend'}).to_record()
    assert record == {'name': 'React', 'percentage': 85, 'category': 'frontend'}


@pytest.mark.parametrize('percentage', [-1, 101])
def test_skill_percentage_bounds(percentage):
    with pytest.raises(ValidationError):
        SkillCreate.model_validate({'name': 'React', 'percentage': percentage, 'category': 'frontend'})


def test_skill_category_must_be_known():
    with pytest.raises(ValidationError):
        SkillCreate.model_validate({'name': 'Rust', 'percentage': 10, 'category': 'systems'})


def test_skill_update_partial_and_not_null():
    assert SkillUpdate.model_validate({'percentage': 50}).to_record() == {'percentage': 50}
    with pytest.raises(ValidationError):
        SkillUpdate.model_validate({'name': None})


def test_message_create_rules():
    valid = {'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Hello there!'}
    assert MessageCreate.model_validate(dict(valid, read=True)).to_record() == valid

    with pytest.raises(ValidationError) as exc_info:
        MessageCreate.model_validate({'name': 'V', 'email': 'nope', 'subject': 'Hi', 'message': 'short'})
    assert _fields(exc_info) == {'name', 'email', 'subject', 'message'}

    with pytest.raises(ValidationError):
        MessageCreate.model_validate(dict(valid, message='x' * 5001))


def test_settings_update_requires_object():
    assert SettingsUpdate.model_validate({'data': {'theme': 'dark'}}).to_record() == {'data': {'theme': 'dark'}}
    assert SettingsUpdate.model_validate({'data': {}}).to_record() == {'data': {}}
    for body in ({}, {'data': None}, {'data': ['not', 'an', 'object']}, ['data']):
        with pytest.raises(ValidationError):
            SettingsUpdate.model_validate(body)


def test_format_validation_errors_shape():
    with pytest.raises(ValidationError) as exc_info:
        SkillCreate.model_validate({'name': 'A', 'percentage': 200, 'category': 'frontend'})
    errors = format_validation_errors(exc_info.value)
    assert errors == [{
        'field': 'percentage',
        'message': errors[0]['message'],
        'type': 'less_than_equal',
    }]

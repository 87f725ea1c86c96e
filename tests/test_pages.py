"""Public portfolio site."""

import pytest

from app import create_app


@pytest.fixture
def populated(app, owner):
    storage = app.extensions['storage']
    with app.app_context():
        storage.update_user(owner['id'], {'bio': 'First paragraph\n\n<script>alert(1)</script>'})
        storage.create_project({'title': 'Older featured', 'description': 'x', 'featured': True,
                                'tags': ['flask'], 'status': 'live', 'user_id': owner['id']})
        storage.create_project({'title': 'Newest plain', 'description': 'y', 'user_id': owner['id']})
        storage.create_skill({'name': 'Python', 'percentage': 95, 'category': 'backend', 'user_id': owner['id']})
    return owner


def test_index_without_owner(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'not set up yet' in response.data


def test_index_shows_owner_content(client, populated):
    response = client.get('/')
    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'Jane Owner' in html
    assert 'Full Stack Developer' in html
    assert 'Python' in html
    assert 'jane@example.com' in html
    assert html.index('Older featured') < html.index('Newest plain')
    assert 'Live' in html


def test_bio_is_escaped(client, populated):
    html = client.get('/').get_data(as_text=True)
    assert '<p>First paragraph</p>' in html
    assert '<script>alert(1)</script>' not in html
    assert '&lt;script&gt;' in html


def test_hidden_sections(app, client, populated):
    with app.app_context():
        app.extensions['storage'].update_settings(
            populated['id'], {'data': {'show_projects': False, 'theme': 'dark'}}
        )
    html = client.get('/').get_data(as_text=True)
    assert 'id="projects"' not in html
    assert 'id="skills"' in html
    assert 'theme-dark' in html


def test_contact_form_stores_message(app, client, owner):
    response = client.post('/contact', data={
        'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Nice portfolio site!'
    })
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/#contact')
    with app.app_context():
        messages = app.extensions['storage'].get_messages(owner['id'])
    assert [m['subject'] for m in messages] == ['Hello']


def test_contact_form_flashes_errors(app, client, owner):
    response = client.post('/contact', data={
        'name': 'V', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Too short'
    }, follow_redirects=True)
    html = response.get_data(as_text=True)
    assert 'Name:' in html
    assert 'Message:' in html
    with app.app_context():
        assert app.extensions['storage'].get_messages(owner['id']) == []


def test_contact_form_success_flash(client, owner):
    response = client.post('/contact', data={
        'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Nice portfolio site!'
    }, follow_redirects=True)
    assert b'Thank you! Your message has been sent.' in response.data


def test_contact_form_honeypot(app, client, owner):
    response = client.post('/contact', data={
        'name': 'Bot', 'email': 'bot@example.com', 'subject': 'Buy now', 'message': 'Cheap stuff here!!',
        'website': 'http://spam.example.com'
    })
    assert response.status_code == 302
    with app.app_context():
        assert app.extensions['storage'].get_messages(owner['id']) == []


def test_contact_form_without_owner(client):
    response = client.post('/contact', data={
        'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Nice portfolio site!'
    }, follow_redirects=True)
    assert b'not accepting messages' in response.data


def test_contact_form_rate_limited():
    app = create_app('testing', test_config={'RATE_LIMIT_MAX_REQUESTS': 1})
    client = app.test_client()
    form = {'name': 'Visitor', 'email': 'v@example.com', 'subject': 'Hello', 'message': 'Nice portfolio site!'}
    client.post('/contact', data=form)
    response = client.post('/contact', data=form, follow_redirects=True)
    assert b'Too many requests' in response.data

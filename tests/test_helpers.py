"""Shared helpers, badges and security utilities."""

from datetime import datetime

from markupsafe import Markup

from utils.badges import get_project_type_label, get_skill_category_info, get_status_badge
from utils.helpers import group_skills_by_category, is_honeypot_filled, render_bio, sort_projects_for_display
from utils.security import get_client_ip, hash_password, verify_password


def test_render_bio_paragraphs_and_line_breaks():
    html = render_bio('One\ntwo\r\n\r\nThree')
    assert isinstance(html, Markup)
    assert html == Markup('<p>One<br>\ntwo</p><p>Three</p>')


def test_render_bio_escapes_and_handles_empty():
    assert '&lt;b&gt;' in render_bio('<b>bold</b>')
    assert render_bio('') == Markup('')
    assert render_bio(None) == Markup('')


def test_sort_projects_featured_then_newest():
    projects = [
        {'id': 1, 'title': 'old', 'featured': False, 'created_at': datetime(2023, 1, 1)},
        {'id': 2, 'title': 'featured', 'featured': True, 'created_at': datetime(2022, 1, 1)},
        {'id': 3, 'title': 'new', 'featured': False, 'created_at': datetime(2024, 1, 1)},
    ]
    assert [p['title'] for p in sort_projects_for_display(projects)] == ['featured', 'new', 'old']


def test_group_skills_keeps_category_order():
    grouped = group_skills_by_category([
        {'name': 'Go', 'percentage': 50, 'category': 'backend'},
        {'name': 'Python', 'percentage': 90, 'category': 'backend'},
        {'name': 'CSS', 'percentage': 70, 'category': 'frontend'},
    ])
    assert list(grouped) == ['frontend', 'backend', 'database', 'tooling']
    assert [s['name'] for s in grouped['backend']] == ['Python', 'Go']
    assert grouped['database'] == []


def test_honeypot():
    assert is_honeypot_filled({'website': 'http://spam'}) is True
    assert is_honeypot_filled({'website': '   '}) is False
    assert is_honeypot_filled({}) is False


def test_badges():
    assert get_status_badge('Live')['label'] == 'Live'
    assert get_status_badge('unknown')['label'] == 'Draft'
    assert get_status_badge(None)['label'] == 'Draft'
    assert get_project_type_label('web') == 'Web Application'
    assert get_project_type_label(None) == ''
    assert get_skill_category_info('tooling')['label'] == 'Tools & DevOps'


def test_password_hashing():
    hashed = hash_password('secret123')
    assert hashed != 'secret123'
    assert verify_password('secret123', hashed) is True
    assert verify_password('wrong', hashed) is False
    assert verify_password('', hashed) is False
    assert verify_password('secret123', None) is False


def test_client_ip_ignores_forwarded_header(app):
    # Header values only reach remote_addr through ProxyFix on the WSGI app
    headers = {'X-Forwarded-For': '203.0.113.5, 10.0.0.1'}
    with app.test_request_context('/', headers=headers, environ_base={'REMOTE_ADDR': '192.0.2.1'}):
        assert get_client_ip() == '192.0.2.1'
    with app.test_request_context('/', environ_base={'REMOTE_ADDR': ''}):
        assert get_client_ip() == 'unknown'

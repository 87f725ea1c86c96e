"""
Helpers Module - Utility functions shared by the API and the HTML dashboard
"""

import re
from flask import abort, current_app, request
from markupsafe import Markup, escape

from models import utcnow
from schemas import MessageCreate
from storage import get_storage
from .badges import SKILL_CATEGORIES
from .notifications import notify_new_message

# Entity name -> storage getter name
_GETTERS = {
    'Project': 'get_project',
    'Skill': 'get_skill',
    'Message': 'get_message',
}


def format_validation_errors(exc):
    """
    Flatten a pydantic ValidationError into JSON-safe dicts

    Returns:
        list: [{'field': 'a.b', 'message': '...', 'type': '...'}, ...]
    """
    errors = []
    for err in exc.errors(include_url=False):
        # Errors about the body as a whole have an empty location
        field = '.'.join(str(part) for part in err.get('loc', ())) or 'body'
        message = err.get('msg', 'Invalid value')
        # pydantic prefixes messages raised from validators
        message = re.sub(r'^Value error, ', '', message)
        errors.append({'field': field, 'message': message, 'type': err.get('type', 'value_error')})
    return errors


def get_json_payload():
    """
    Decoded JSON body, passed to the schemas as-is

    A missing or unparseable body comes back as None. The schemas reject
    None and every non-object body with a validation error.
    """
    return request.get_json(silent=True)


def get_owned_or_abort(entity, record_id, user_id):
    """
    Fetch a record and check it belongs to user_id

    Aborts with 404 when missing and 403 when owned by someone else.
    """
    record = getattr(get_storage(), _GETTERS[entity])(record_id)
    if record is None:
        abort(404, description=f'{entity} not found')
    if record.get('user_id') != user_id:
        abort(403, description='Forbidden')
    return record


def sort_projects_for_display(projects):
    """Featured first, then newest first"""
    return sorted(
        projects,
        key=lambda p: (not p.get('featured'), -(p['created_at'].timestamp() if p.get('created_at') else 0), -p['id'])
    )


def group_skills_by_category(skills):
    """{category: [skills sorted by percentage desc]} in display order"""
    grouped = {category: [] for category in SKILL_CATEGORIES}
    for skill in skills:
        grouped.setdefault(skill['category'], []).append(skill)
    for category in grouped:
        grouped[category].sort(key=lambda s: (-s['percentage'], s['name'].lower()))
    return grouped


def get_dashboard_stats(user_id):
    """Counters shown on the dashboard cards"""
    storage = get_storage()
    projects = storage.get_projects(user_id)
    messages = storage.get_messages(user_id)
    skills = storage.get_skills(user_id)

    now = utcnow()
    new_projects = [
        p for p in projects
        if p.get('created_at') and p['created_at'].year == now.year and p['created_at'].month == now.month
    ]

    return {
        'projects': len(projects),
        'featured_projects': len([p for p in projects if p.get('featured')]),
        'new_projects_this_month': len(new_projects),
        'messages': len(messages),
        'unread_messages': len([m for m in messages if not m.get('read')]),
        'skills': len(skills),
        'skills_by_category': {
            category: len(items) for category, items in group_skills_by_category(skills).items()
        },
    }


def is_honeypot_filled(form):
    """Bots fill the hidden 'website' field, people don't"""
    if not hasattr(form, 'get'):
        return False
    return bool(str(form.get('website') or '').strip())


def receive_contact_message(raw, recipient_id):
    """
    Validate and store a contact message, then notify the owner

    Raises:
        pydantic.ValidationError: the message failed validation
    """
    data = MessageCreate.model_validate(raw).to_record()
    message = get_storage().create_message(dict(data, user_id=recipient_id))
    current_app.logger.info(f"Contact message {message['id']} received for user {recipient_id}")
    notify_new_message(message)
    return message


def get_unread_messages_count(user_id):
    if not user_id:
        return 0
    return len([m for m in get_storage().get_messages(user_id) if not m.get('read')])


def render_bio(text):
    """Render a plain-text bio as escaped HTML paragraphs, single newlines as <br>"""
    if not text:
        return Markup('')
    normalized = text.replace('\r\n', '\n').replace('\r', '\n').strip()
    paragraphs = [p.strip() for p in re.split(r'\n\s*\n', normalized) if p.strip()]
    html = Markup('')
    for paragraph in paragraphs:
        lines = Markup('<br>\n').join(escape(line.strip()) for line in paragraph.split('\n'))
        html += Markup('<p>') + lines + Markup('</p>')
    return html


__all__ = [
    'format_validation_errors',
    'get_json_payload',
    'get_owned_or_abort',
    'sort_projects_for_display',
    'group_skills_by_category',
    'get_dashboard_stats',
    'is_honeypot_filled',
    'receive_contact_message',
    'get_unread_messages_count',
    'render_bio'
]

"""
Data Management Module - Importing and exporting whole portfolios

Export format:
    {
        "user": {"username": ..., "name": ..., "title": ..., ...},
        "projects": [{...}, ...],
        "skills": [{...}, ...],
        "settings": {...}
    }

Imports validate every item with the request schemas and are idempotent:
re-importing the same file adds nothing new.
"""

import json
import secrets
from flask import current_app
from pydantic import ValidationError

from schemas import PROFILE_FIELDS, ProfileUpdate, ProjectCreate, SkillCreate
from storage import get_storage
from .security import hash_password

PROJECT_EXPORT_FIELDS = (
    'title', 'description', 'image', 'primary_tag', 'tags', 'live_link',
    'github_link', 'featured', 'type', 'status'
)
SKILL_EXPORT_FIELDS = ('name', 'percentage', 'category')
EXPORT_SECTIONS = (
    ('user', dict, 'object'),
    ('projects', list, 'array'),
    ('skills', list, 'array'),
    ('settings', dict, 'object'),
)


def export_portfolio(user_id):
    """
    Export a user's portfolio content

    Returns:
        dict: export payload, None when the user does not exist
    """
    storage = get_storage()
    user = storage.get_user(user_id)
    if not user:
        return None

    settings = storage.get_settings(user_id)
    user_data = {'username': user['username']}
    user_data.update({field: user.get(field) for field in PROFILE_FIELDS})
    return {
        'user': user_data,
        'projects': [
            {field: p.get(field) for field in PROJECT_EXPORT_FIELDS}
            for p in storage.get_projects(user_id)
        ],
        'skills': [
            {field: s.get(field) for field in SKILL_EXPORT_FIELDS}
            for s in storage.get_skills(user_id)
        ],
        'settings': settings['data'] if settings else {},
    }


def import_portfolio(payload, username=None):
    """
    Load an export payload into storage

    Args:
        payload (dict): export payload
        username (str, optional): overrides payload['user']['username']

    Returns:
        dict: {'user': record, 'projects': n_added, 'skills': n_added}

    Raises:
        ValueError: the payload is not an export object, or has no username
        pydantic.ValidationError: an item failed validation
    """
    if not isinstance(payload, dict):
        raise ValueError('Portfolio export must be a JSON object')
    for key, kind, label in EXPORT_SECTIONS:
        if payload.get(key) is not None and not isinstance(payload[key], kind):
            raise ValueError(f"Portfolio export field '{key}' must be a JSON {label}")

    storage = get_storage()
    user_data = dict(payload.get('user') or {})
    username = username or user_data.get('username')
    if not username:
        raise ValueError('Portfolio export has no username')

    # Empty values in an export mean "not set"
    profile = ProfileUpdate.model_validate(
        {k: v for k, v in user_data.items() if v not in (None, '')}
    ).to_record()
    projects = [ProjectCreate.model_validate(p).to_record() for p in payload.get('projects') or []]
    skills = [SkillCreate.model_validate(s).to_record() for s in payload.get('skills') or []]

    user = storage.get_user_by_username(username)
    if user:
        user = storage.update_user(user['id'], profile) if profile else user
    else:
        password = user_data.get('password') or secrets.token_urlsafe(24)
        record = {'name': username, 'title': '', 'short_bio': '', 'bio': ''}
        record.update(profile)
        record.update(username=username, password_hash=hash_password(password))
        user = storage.create_user(record)
        current_app.logger.info(f"Imported new user {username} (id={user['id']})")

    existing_titles = {p['title'] for p in storage.get_projects(user['id'])}
    added_projects = 0
    for project in projects:
        if project['title'] in existing_titles:
            continue
        storage.create_project(dict(project, user_id=user['id']))
        existing_titles.add(project['title'])
        added_projects += 1

    existing_skills = {s['name'] for s in storage.get_skills(user['id'])}
    added_skills = 0
    for skill in skills:
        if skill['name'] in existing_skills:
            continue
        storage.create_skill(dict(skill, user_id=user['id']))
        existing_skills.add(skill['name'])
        added_skills += 1

    if payload.get('settings'):
        storage.update_settings(user['id'], {'data': payload['settings']})

    current_app.logger.info(
        f"Imported portfolio for {username}: {added_projects} projects, {added_skills} skills"
    )
    return {'user': user, 'projects': added_projects, 'skills': added_skills}


def load_seed_file(app):
    """Import PORTFOLIO_SEED_FILE at startup, if configured"""
    path = app.config.get('PORTFOLIO_SEED_FILE')
    if not path:
        return None
    with app.app_context():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            app.logger.error(f"✗ Could not read portfolio seed file {path}: {str(e)}")
            return None
        try:
            result = import_portfolio(payload)
        except (ValueError, ValidationError) as e:
            app.logger.error(f"✗ Could not import portfolio seed file {path}: {str(e)}")
            return None
        app.logger.info(f"✓ Seeded portfolio from {path}")
        return result


__all__ = ['export_portfolio', 'import_portfolio', 'load_seed_file']

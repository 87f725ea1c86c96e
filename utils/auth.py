"""
Auth Module - Session login on top of Flask-Login and the user store
"""

from flask import current_app, request, jsonify, flash, redirect, url_for
from flask_login import UserMixin, current_user

from extensions import login_manager
from schemas import RegisterRequest
from storage import get_storage, DuplicateError
from .security import hash_password, verify_password, log_audit_event


class AuthUser(UserMixin):
    """Logged-in user as seen by Flask-Login, wrapping a stored user record"""

    def __init__(self, record):
        self.record = record
        self.id = record['id']
        self.username = record['username']

    def get_id(self):
        return str(self.id)

    def __repr__(self):
        return f"<AuthUser {self.id} {self.username}>"


@login_manager.user_loader
def load_user(user_id):
    try:
        record = get_storage().get_user(int(user_id))
    except (TypeError, ValueError):
        return None
    return AuthUser(record) if record else None


@login_manager.unauthorized_handler
def unauthorized():
    if request.path.startswith('/api/'):
        return jsonify({'message': 'Unauthorized'}), 401
    flash(login_manager.login_message, login_manager.login_message_category)
    return redirect(url_for(login_manager.login_view, next=request.path))


def public_user(record):
    """User record safe to send to clients"""
    if record is None:
        return None
    return {k: v for k, v in record.items() if k != 'password_hash'}


def authenticate(username, password):
    """Return the stored user for valid credentials, None otherwise"""
    user = get_storage().get_user_by_username(username)
    if user and verify_password(password, user['password_hash']):
        return user
    return None


def register_account(payload: RegisterRequest):
    """
    Create a user from validated registration data

    Raises:
        DuplicateError: the username is taken
    """
    data = payload.model_dump()
    data['password_hash'] = hash_password(data.pop('password'))
    user = get_storage().create_user(data)
    current_app.logger.info(f"Registered user {user['username']} (id={user['id']})")
    log_audit_event('register', username=user['username'])
    return user


def ensure_owner_account(app):
    """Create the portfolio owner from OWNER_USERNAME / OWNER_PASSWORD if missing"""
    username = app.config.get('OWNER_USERNAME')
    password = app.config.get('OWNER_PASSWORD')
    if not username or not password:
        return None

    with app.app_context():
        storage = get_storage()
        existing = storage.get_user_by_username(username)
        if existing:
            return existing
        try:
            owner = storage.create_user({
                'username': username,
                'password_hash': hash_password(password),
                'name': app.config.get('OWNER_NAME') or username,
                'title': app.config.get('OWNER_TITLE') or '',
                'short_bio': '',
                'bio': '',
            })
        except DuplicateError:
            return storage.get_user_by_username(username)
        app.logger.info(f"✓ Created portfolio owner account '{username}' (id={owner['id']})")
        return owner


def resolve_portfolio_user():
    """
    User whose content a request sees: the logged-in user, or the
    portfolio owner for anonymous visitors

    Returns:
        dict | None: stored user record
    """
    storage = get_storage()
    if current_user.is_authenticated:
        return storage.get_user(current_user.id)
    return storage.get_user(current_app.config.get('PORTFOLIO_OWNER_ID', 1))


def get_portfolio_owner():
    return get_storage().get_user(current_app.config.get('PORTFOLIO_OWNER_ID', 1))


__all__ = [
    'AuthUser',
    'load_user',
    'public_user',
    'authenticate',
    'register_account',
    'ensure_owner_account',
    'resolve_portfolio_user',
    'get_portfolio_owner'
]

"""
API Auth Routes - Session-cookie login for API clients
"""

from flask import current_app, jsonify, abort
from flask_login import login_user, logout_user, current_user, login_required

from schemas import LoginRequest, RegisterRequest
from storage import DuplicateError, get_storage
from utils.auth import AuthUser, authenticate, register_account, public_user
from utils.decorators import rate_limited, registration_required
from utils.helpers import get_json_payload
from utils.security import log_audit_event
from . import api_bp


@api_bp.route('/register', methods=['POST'])
@registration_required
def register():
    """Create an account and log it in"""
    payload = RegisterRequest.model_validate(get_json_payload())
    try:
        user = register_account(payload)
    except DuplicateError:
        abort(400, description='Username already exists')

    login_user(AuthUser(user))
    return jsonify(public_user(user)), 201


@api_bp.route('/login', methods=['POST'])
@rate_limited('login')
def login():
    credentials = LoginRequest.model_validate(get_json_payload())
    user = authenticate(credentials.username, credentials.password)
    if not user:
        current_app.logger.warning(f"Failed API login for {credentials.username}")
        log_audit_event('failed_login', username=credentials.username)
        return jsonify({'message': 'Invalid username or password'}), 401

    login_user(AuthUser(user))
    current_app.logger.info(f"User {user['username']} logged in")
    log_audit_event('login', username=user['username'])
    return jsonify(public_user(user))


@api_bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        log_audit_event('logout', username=current_user.username)
        logout_user()
    return '', 204


@api_bp.route('/user')
@login_required
def user():
    """Currently logged-in user"""
    record = get_storage().get_user(current_user.id)
    if not record:
        abort(401, description='Unauthorized')
    return jsonify(public_user(record))

"""
Auth Routes - Login, registration and logout forms
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, current_user
from pydantic import ValidationError

from schemas import LoginRequest, RegisterRequest
from storage import DuplicateError
from utils.auth import AuthUser, authenticate, register_account
from utils.decorators import rate_limited, registration_required
from utils.helpers import format_validation_errors
from utils.security import log_audit_event
from . import auth_bp


def _safe_next(target):
    # Only follow local paths
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return url_for('dashboard.index')


def _flash_errors(exc):
    for error in format_validation_errors(exc):
        flash(f"{error['field']}: {error['message']}", 'error')


@auth_bp.route('', methods=['GET'])
def login():
    """Login and registration page"""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))
    return render_template('auth.html',
                           next=request.args.get('next', ''),
                           registration_enabled=current_app.config.get('REGISTRATION_ENABLED'))


@auth_bp.route('/login', methods=['POST'])
@rate_limited('login')
def login_submit():
    try:
        credentials = LoginRequest.model_validate(request.form.to_dict())
    except ValidationError as e:
        _flash_errors(e)
        return redirect(url_for('auth.login'))

    user = authenticate(credentials.username, credentials.password)
    if not user:
        flash('Invalid credentials. Please try again.', 'error')
        log_audit_event('failed_login', username=credentials.username)
        return redirect(url_for('auth.login'))

    login_user(AuthUser(user), remember=bool(request.form.get('remember')))
    log_audit_event('login', username=user['username'])
    flash(f"Welcome back, {user['name']}!", 'success')
    return redirect(_safe_next(request.form.get('next')))


@auth_bp.route('/register', methods=['POST'])
@registration_required
def register():
    try:
        payload = RegisterRequest.model_validate(request.form.to_dict())
        user = register_account(payload)
    except ValidationError as e:
        _flash_errors(e)
        return redirect(url_for('auth.login'))
    except DuplicateError:
        flash('Username already exists.', 'error')
        return redirect(url_for('auth.login'))

    login_user(AuthUser(user))
    flash(f"Welcome to your portfolio, {user['name']}!", 'success')
    return redirect(url_for('dashboard.index'))


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Logout current user"""
    if current_user.is_authenticated:
        log_audit_event('logout', username=current_user.username)
        logout_user()
        flash('Logged out successfully', 'success')
    return redirect(url_for('auth.login'))

"""
API Profile Routes - Profile, settings and dashboard statistics
"""

from flask import current_app, jsonify, abort
from flask_login import current_user, login_required

from schemas import ProfileUpdate, SettingsUpdate
from storage import get_storage
from utils.auth import resolve_portfolio_user, public_user
from utils.helpers import get_json_payload, get_dashboard_stats
from . import api_bp


@api_bp.route('/profile')
def get_profile():
    """Profile of the logged-in user, or of the portfolio owner for visitors"""
    user = resolve_portfolio_user()
    if not user:
        abort(404, description='Profile not found')
    return jsonify(public_user(user))


@api_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    # username and password are not part of ProfileUpdate and are dropped
    data = ProfileUpdate.model_validate(get_json_payload()).to_record()
    user = get_storage().update_user(current_user.id, data)
    if not user:
        abort(404, description='User not found')
    current_app.logger.info(f"Profile updated for {current_user.username}: {sorted(data)}")
    return jsonify(public_user(user))


@api_bp.route('/settings')
@login_required
def get_settings():
    settings = get_storage().get_settings(current_user.id)
    if not settings:
        return jsonify({'user_id': current_user.id, 'data': {}})
    return jsonify(settings)


@api_bp.route('/settings', methods=['PUT'])
@login_required
def update_settings():
    data = SettingsUpdate.model_validate(get_json_payload()).to_record()
    settings = get_storage().update_settings(current_user.id, data)
    return jsonify(settings)


@api_bp.route('/dashboard/stats')
@login_required
def dashboard_stats():
    return jsonify(get_dashboard_stats(current_user.id))

"""
API Message Routes - Contact messages sent to the portfolio owner
"""

from flask import current_app, jsonify, abort
from flask_login import current_user, login_required

from storage import get_storage
from utils.auth import resolve_portfolio_user
from utils.decorators import rate_limited
from utils.helpers import get_json_payload, get_owned_or_abort, is_honeypot_filled, receive_contact_message
from . import api_bp


@api_bp.route('/messages')
@login_required
def list_messages():
    return jsonify(get_storage().get_messages(current_user.id))


@api_bp.route('/messages', methods=['POST'])
@rate_limited('contact')
def create_message():
    """Contact form submission; visitors write to the portfolio owner"""
    recipient = resolve_portfolio_user()
    if not recipient:
        abort(400, description='Cannot determine message recipient')

    payload = get_json_payload()
    if is_honeypot_filled(payload):
        current_app.logger.info("Honeypot triggered on contact API, message dropped")
        return jsonify({'success': True}), 201

    message = receive_contact_message(payload, recipient['id'])
    return jsonify(message), 201


@api_bp.route('/messages/<int:message_id>/read', methods=['PUT'])
@login_required
def mark_message_read(message_id):
    get_owned_or_abort('Message', message_id, current_user.id)
    return jsonify(get_storage().mark_message_as_read(message_id))


@api_bp.route('/messages/<int:message_id>', methods=['DELETE'])
@login_required
def delete_message(message_id):
    get_owned_or_abort('Message', message_id, current_user.id)
    get_storage().delete_message(message_id)
    current_app.logger.info(f"Message {message_id} deleted by {current_user.username}")
    return '', 204

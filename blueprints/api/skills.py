"""
API Skill Routes
"""

from flask import current_app, jsonify, abort
from flask_login import current_user, login_required

from schemas import SkillCreate, SkillUpdate
from storage import DuplicateError, get_storage
from utils.auth import resolve_portfolio_user
from utils.helpers import get_json_payload, get_owned_or_abort
from . import api_bp


@api_bp.route('/skills')
def list_skills():
    user = resolve_portfolio_user()
    if not user:
        return jsonify([])
    return jsonify(get_storage().get_skills(user['id']))


@api_bp.route('/skills/category/<category>')
def list_skills_by_category(category):
    user = resolve_portfolio_user()
    if not user:
        return jsonify([])
    return jsonify(get_storage().get_skills_by_category(user['id'], category.lower()))


@api_bp.route('/skills', methods=['POST'])
@login_required
def create_skill():
    data = SkillCreate.model_validate(get_json_payload()).to_record()
    try:
        skill = get_storage().create_skill(dict(data, user_id=current_user.id))
    except DuplicateError:
        abort(409, description=f"Skill '{data['name']}' already exists")
    current_app.logger.info(f"Skill {skill['id']} created by {current_user.username}")
    return jsonify(skill), 201


@api_bp.route('/skills/<int:skill_id>', methods=['PUT'])
@login_required
def update_skill(skill_id):
    get_owned_or_abort('Skill', skill_id, current_user.id)
    data = SkillUpdate.model_validate(get_json_payload()).to_record()
    try:
        skill = get_storage().update_skill(skill_id, data)
    except DuplicateError:
        abort(409, description=f"Skill '{data.get('name')}' already exists")
    current_app.logger.info(f"Skill {skill_id} updated by {current_user.username}")
    return jsonify(skill)


@api_bp.route('/skills/<int:skill_id>', methods=['DELETE'])
@login_required
def delete_skill(skill_id):
    get_owned_or_abort('Skill', skill_id, current_user.id)
    get_storage().delete_skill(skill_id)
    current_app.logger.info(f"Skill {skill_id} deleted by {current_user.username}")
    return '', 204

"""
API Project Routes
"""

from flask import current_app, jsonify, abort
from flask_login import current_user, login_required

from schemas import ProjectCreate, ProjectUpdate
from storage import get_storage
from utils.auth import resolve_portfolio_user
from utils.helpers import get_json_payload, get_owned_or_abort
from . import api_bp


@api_bp.route('/projects')
def list_projects():
    """Projects of the logged-in user, or of the portfolio owner for visitors"""
    user = resolve_portfolio_user()
    if not user:
        return jsonify([])
    return jsonify(get_storage().get_projects(user['id']))


@api_bp.route('/projects/<int:project_id>')
def get_project(project_id):
    project = get_storage().get_project(project_id)
    if not project:
        abort(404, description='Project not found')
    return jsonify(project)


@api_bp.route('/projects', methods=['POST'])
@login_required
def create_project():
    data = ProjectCreate.model_validate(get_json_payload()).to_record()
    project = get_storage().create_project(dict(data, user_id=current_user.id))
    current_app.logger.info(f"Project {project['id']} created by {current_user.username}")
    return jsonify(project), 201


@api_bp.route('/projects/<int:project_id>', methods=['PUT'])
@login_required
def update_project(project_id):
    get_owned_or_abort('Project', project_id, current_user.id)
    data = ProjectUpdate.model_validate(get_json_payload()).to_record()
    project = get_storage().update_project(project_id, data)
    current_app.logger.info(f"Project {project_id} updated by {current_user.username}")
    return jsonify(project)


@api_bp.route('/projects/<int:project_id>', methods=['DELETE'])
@login_required
def delete_project(project_id):
    get_owned_or_abort('Project', project_id, current_user.id)
    get_storage().delete_project(project_id)
    current_app.logger.info(f"Project {project_id} deleted by {current_user.username}")
    return '', 204

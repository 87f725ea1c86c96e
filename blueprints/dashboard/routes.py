"""
Dashboard Routes - Portfolio management pages
Handles: Overview, profile, projects, skills, messages and settings
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import login_required, current_user
from pydantic import ValidationError

from schemas import PROFILE_FIELDS, ProfileUpdate, ProjectCreate, ProjectUpdate, SkillCreate, SkillUpdate, SettingsUpdate
from storage import DuplicateError, get_storage
from utils.auth import public_user
from utils.badges import PROJECT_TYPES, STATUS_BADGES
from utils.helpers import (
    format_validation_errors,
    get_dashboard_stats,
    get_owned_or_abort,
    group_skills_by_category
)
from . import dashboard_bp

THEMES = ('light', 'dark')
SECTION_FLAGS = ('show_about', 'show_skills', 'show_projects', 'show_contact')


def _flash_errors(exc):
    for error in format_validation_errors(exc):
        flash(f"{error['field']}: {error['message']}", 'error')


def _project_form_data():
    data = request.form.to_dict()
    # Unchecked checkboxes are absent from the form
    data['featured'] = 'featured' in request.form
    return data


def _newest_first(records):
    return sorted(records, key=lambda r: r['id'], reverse=True)


@dashboard_bp.route('/')
@login_required
def index():
    """Dashboard overview"""
    storage = get_storage()
    return render_template('dashboard/index.html',
                           stats=get_dashboard_stats(current_user.id),
                           latest_messages=_newest_first(storage.get_messages(current_user.id))[:5],
                           latest_projects=_newest_first(storage.get_projects(current_user.id))[:5])


@dashboard_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    """Edit profile section"""
    storage = get_storage()
    if request.method == 'POST':
        form = {field: request.form.get(field, '') for field in PROFILE_FIELDS}
        try:
            data = ProfileUpdate.model_validate(form).to_record()
        except ValidationError as e:
            _flash_errors(e)
            return render_template('dashboard/profile.html', profile=form), 400
        storage.update_user(current_user.id, data)
        current_app.logger.info(f"Profile updated from dashboard by {current_user.username}")
        flash('Profile saved successfully', 'success')
        return redirect(url_for('dashboard.profile'))

    return render_template('dashboard/profile.html',
                           profile=public_user(storage.get_user(current_user.id)))


@dashboard_bp.route('/projects')
@login_required
def projects():
    """List all projects"""
    return render_template('dashboard/projects.html',
                           projects=_newest_first(get_storage().get_projects(current_user.id)),
                           statuses=STATUS_BADGES)


@dashboard_bp.route('/projects/add', methods=['GET', 'POST'])
@login_required
def add_project():
    """Add new project"""
    if request.method == 'POST':
        form = _project_form_data()
        try:
            data = ProjectCreate.model_validate(form).to_record()
        except ValidationError as e:
            _flash_errors(e)
            return render_template('dashboard/project_form.html', project=form,
                                   project_types=PROJECT_TYPES, statuses=STATUS_BADGES), 400
        project = get_storage().create_project(dict(data, user_id=current_user.id))
        current_app.logger.info(f"Project {project['id']} created from dashboard by {current_user.username}")
        flash('Project added successfully', 'success')
        return redirect(url_for('dashboard.projects'))

    return render_template('dashboard/project_form.html', project={'status': 'draft', 'tags': []},
                           project_types=PROJECT_TYPES, statuses=STATUS_BADGES)


@dashboard_bp.route('/projects/<int:project_id>/edit', methods=['GET', 'POST'])
@login_required
def edit_project(project_id):
    """Edit existing project"""
    project = get_owned_or_abort('Project', project_id, current_user.id)

    if request.method == 'POST':
        form = _project_form_data()
        try:
            data = ProjectUpdate.model_validate(form).to_record()
        except ValidationError as e:
            _flash_errors(e)
            return render_template('dashboard/project_form.html', project=dict(form, id=project_id),
                                   project_types=PROJECT_TYPES, statuses=STATUS_BADGES), 400
        get_storage().update_project(project_id, data)
        current_app.logger.info(f"Project {project_id} updated from dashboard by {current_user.username}")
        flash('Project updated successfully', 'success')
        return redirect(url_for('dashboard.projects'))

    return render_template('dashboard/project_form.html', project=project,
                           project_types=PROJECT_TYPES, statuses=STATUS_BADGES)


@dashboard_bp.route('/projects/<int:project_id>/delete', methods=['POST'])
@login_required
def delete_project(project_id):
    get_owned_or_abort('Project', project_id, current_user.id)
    get_storage().delete_project(project_id)
    current_app.logger.info(f"Project {project_id} deleted from dashboard by {current_user.username}")
    flash('Project deleted successfully', 'success')
    return redirect(url_for('dashboard.projects'))


@dashboard_bp.route('/skills', methods=['GET', 'POST'])
@login_required
def skills():
    """Skills grouped by category, with an add form"""
    storage = get_storage()
    if request.method == 'POST':
        try:
            data = SkillCreate.model_validate(request.form.to_dict()).to_record()
            storage.create_skill(dict(data, user_id=current_user.id))
        except ValidationError as e:
            _flash_errors(e)
        except DuplicateError:
            flash(f"Skill '{request.form.get('name', '').strip()}' already exists", 'error')
        else:
            flash('Skill added successfully', 'success')
        return redirect(url_for('dashboard.skills', category=request.form.get('category')))

    return render_template('dashboard/skills.html',
                           skills=group_skills_by_category(storage.get_skills(current_user.id)),
                           active_category=request.args.get('category', 'frontend'))


@dashboard_bp.route('/skills/<int:skill_id>/edit', methods=['POST'])
@login_required
def edit_skill(skill_id):
    skill = get_owned_or_abort('Skill', skill_id, current_user.id)
    try:
        data = SkillUpdate.model_validate(request.form.to_dict()).to_record()
        get_storage().update_skill(skill_id, data)
    except ValidationError as e:
        _flash_errors(e)
    except DuplicateError:
        flash(f"Skill '{request.form.get('name', '').strip()}' already exists", 'error')
    else:
        current_app.logger.info(f"Skill {skill_id} updated from dashboard by {current_user.username}")
        flash('Skill updated successfully', 'success')
    return redirect(url_for('dashboard.skills', category=skill['category']))


@dashboard_bp.route('/skills/<int:skill_id>/delete', methods=['POST'])
@login_required
def delete_skill(skill_id):
    skill = get_owned_or_abort('Skill', skill_id, current_user.id)
    get_storage().delete_skill(skill_id)
    current_app.logger.info(f"Skill {skill_id} deleted from dashboard by {current_user.username}")
    flash('Skill deleted successfully', 'success')
    return redirect(url_for('dashboard.skills', category=skill['category']))


@dashboard_bp.route('/messages')
@login_required
def messages():
    """Inbox, newest first"""
    inbox = _newest_first(get_storage().get_messages(current_user.id))
    unread = len([m for m in inbox if not m['read']])
    return render_template('dashboard/messages.html', messages=inbox, unread_count=unread)


@dashboard_bp.route('/messages/<int:message_id>')
@login_required
def view_message(message_id):
    """View message and mark it as read"""
    message = get_owned_or_abort('Message', message_id, current_user.id)
    if not message['read']:
        message = get_storage().mark_message_as_read(message_id)
    return render_template('dashboard/view_message.html', message=message)


@dashboard_bp.route('/messages/<int:message_id>/read', methods=['POST'])
@login_required
def mark_message_read(message_id):
    get_owned_or_abort('Message', message_id, current_user.id)
    get_storage().mark_message_as_read(message_id)
    flash('Message marked as read', 'success')
    return redirect(url_for('dashboard.messages'))


@dashboard_bp.route('/messages/<int:message_id>/delete', methods=['POST'])
@login_required
def delete_message(message_id):
    get_owned_or_abort('Message', message_id, current_user.id)
    get_storage().delete_message(message_id)
    current_app.logger.info(f"Message {message_id} deleted from dashboard by {current_user.username}")
    flash('Message deleted successfully', 'success')
    return redirect(url_for('dashboard.messages'))


@dashboard_bp.route('/settings', methods=['GET', 'POST'])
@login_required
def settings():
    """Theme and section visibility"""
    storage = get_storage()
    current = storage.get_settings(current_user.id)
    data = dict(current['data']) if current else {}

    if request.method == 'POST':
        theme = request.form.get('theme', 'light')
        data['theme'] = theme if theme in THEMES else 'light'
        for flag in SECTION_FLAGS:
            data[flag] = flag in request.form
        storage.update_settings(current_user.id, SettingsUpdate(data=data).to_record())
        flash('Settings saved successfully', 'success')
        return redirect(url_for('dashboard.settings'))

    return render_template('dashboard/settings.html', settings=data, themes=THEMES, section_flags=SECTION_FLAGS)

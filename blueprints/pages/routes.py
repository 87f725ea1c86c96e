"""
Pages Routes - Public portfolio site
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from pydantic import ValidationError

from storage import get_storage
from utils.auth import get_portfolio_owner, public_user
from utils.decorators import rate_limited
from utils.helpers import (
    format_validation_errors,
    group_skills_by_category,
    is_honeypot_filled,
    receive_contact_message,
    sort_projects_for_display
)
from . import pages_bp


@pages_bp.route('/')
def index():
    """Portfolio home: hero, about, skills, projects, contact"""
    owner = get_portfolio_owner()
    if not owner:
        return render_template('index.html', profile=None, projects=[], skills={}, settings={})

    storage = get_storage()
    settings = storage.get_settings(owner['id'])
    return render_template('index.html',
                           profile=public_user(owner),
                           projects=sort_projects_for_display(storage.get_projects(owner['id'])),
                           skills=group_skills_by_category(storage.get_skills(owner['id'])),
                           settings=settings['data'] if settings else {})


@pages_bp.route('/contact', methods=['POST'])
@rate_limited('contact')
def contact():
    """Contact form processing"""
    contact_url = url_for('pages.index', _anchor='contact')

    if is_honeypot_filled(request.form):
        current_app.logger.info("Honeypot triggered on contact form, message dropped")
        flash('Thank you! Your message has been sent.', 'success')
        return redirect(contact_url)

    owner = get_portfolio_owner()
    if not owner:
        flash('This portfolio is not accepting messages yet.', 'error')
        return redirect(contact_url)

    try:
        receive_contact_message(request.form.to_dict(), owner['id'])
    except ValidationError as e:
        for error in format_validation_errors(e):
            flash(f"{error['field'].capitalize()}: {error['message']}", 'error')
        return redirect(contact_url)

    flash('Thank you! Your message has been sent.', 'success')
    return redirect(contact_url)

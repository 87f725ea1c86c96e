"""
Pages Blueprint - Public portfolio site
Handles: Home page (hero, about, skills, projects, contact) and the contact form
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes

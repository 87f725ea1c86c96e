"""
Dashboard Blueprint - Authenticated portfolio management
Handles: Profile, projects, skills, messages and settings pages
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')

from . import routes

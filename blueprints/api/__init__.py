"""
API Blueprint - JSON REST API
Handles: Session auth, projects, skills, messages, profile, settings and dashboard stats
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import auth, projects, skills, messages, profile

"""
Auth Blueprint - HTML login, registration and logout
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

from . import routes

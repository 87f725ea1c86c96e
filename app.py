"""
Portfolio CMS - Main Application Entry Point
Application Factory Pattern: configuration, extensions, storage, blueprints,
error handlers and hooks are wired up in create_app().
"""

import logging
import os
from datetime import datetime

from flask import Flask, jsonify, render_template, request
from flask.json.provider import DefaultJSONProvider
from flask.logging import default_handler
from flask_login import current_user
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from config import get_config
from extensions import login_manager
from storage import init_storage

# Import all blueprints
from blueprints.api import api_bp
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.dashboard import dashboard_bp


class PortfolioJSONProvider(DefaultJSONProvider):
    """ISO-8601 datetimes and non-ASCII text kept as-is"""
    ensure_ascii = False
    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, datetime):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def create_app(config_name=None, test_config=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)
        test_config (dict): Settings applied on top of the configuration class (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)
    app.json_provider_class = PortfolioJSONProvider
    app.json = PortfolioJSONProvider(app)

    # Load configuration
    app.config.from_object(get_config(config_name))
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    # Trust X-Forwarded-For only from the configured number of proxies
    proxy_hops = int(app.config.get('PROXY_FIX_X_FOR') or 0)
    if proxy_hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_hops)

    # Initialize extensions and storage
    initialize_extensions(app)

    # Register Jinja filters and globals
    register_template_helpers(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    from cli import register_commands
    register_commands(app)

    # Bootstrap owner account and seed content
    bootstrap_content(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio CMS is running',
                'storage': app.extensions['storage'].name}, 200

    return app


def configure_logging(app):
    """Apply LOG_LEVEL to the app logger and the audit logger"""
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)

    audit_logger = logging.getLogger('portfolio.audit')
    audit_logger.setLevel(level)
    if default_handler not in audit_logger.handlers:
        audit_logger.addHandler(default_handler)


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    login_manager.init_app(app)

    # Registers the user loader and unauthorized handler
    import utils.auth  # noqa: F401

    try:
        init_storage(app)
    except Exception as e:
        app.logger.error(f"✗ Storage initialization failed: {str(e)}")
        raise


def register_template_helpers(app):
    from utils.badges import get_status_badge, get_project_type_label, get_skill_category_info
    from utils.helpers import render_bio

    app.jinja_env.filters['render_bio'] = render_bio
    app.jinja_env.globals.update(
        get_status_badge=get_status_badge,
        get_project_type_label=get_project_type_label,
        get_skill_category_info=get_skill_category_info
    )


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(dashboard_bp)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(ValidationError)
    def validation_error(e):
        from utils.helpers import format_validation_errors
        errors = format_validation_errors(e)
        if _wants_json():
            return jsonify({'message': 'Validation error', 'errors': errors}), 400
        return render_template('error.html', code=400, message='Validation error', errors=errors), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        if _wants_json():
            return jsonify({'message': e.description}), e.code
        return render_template('error.html', code=e.code, message=e.description), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.exception(f"Server Error: {str(e)}")
        if _wants_json():
            return jsonify({'message': 'Server error'}), 500
        return render_template('error.html', code=500, message='Something went wrong on our side.'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        from utils.auth import get_portfolio_owner
        from utils.helpers import get_unread_messages_count

        owner = get_portfolio_owner()
        return {
            'site_name': owner['name'] if owner else 'Portfolio',
            'current_year': datetime.now().year,
            'unread_messages_count': (
                get_unread_messages_count(current_user.id) if current_user.is_authenticated else 0
            ),
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline' https://cdnjs.cloudflare.com; "
            "font-src 'self' https://cdnjs.cloudflare.com; "
            "img-src * data:; "
            "frame-ancestors 'none';"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        if app.config.get('SESSION_COOKIE_SECURE'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


def bootstrap_content(app):
    """Owner account from OWNER_USERNAME / OWNER_PASSWORD, then PORTFOLIO_SEED_FILE"""
    from utils.auth import ensure_owner_account
    from utils.data import load_seed_file

    ensure_owner_account(app)
    load_seed_file(app)


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )

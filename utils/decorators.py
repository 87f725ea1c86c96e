"""
Decorators Module - Request guards shared by API and HTML routes
"""

from functools import wraps
from flask import abort, current_app, flash, redirect, request, url_for
from .security import check_rate_limit


def rate_limited(endpoint):
    """Reject the request once the client IP exceeds the rate limit for endpoint"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not check_rate_limit(endpoint):
                if request.path.startswith('/api/'):
                    abort(429, description='Too many requests. Please try again later.')
                flash('Too many requests. Please try again later.', 'error')
                return redirect(request.referrer or url_for('pages.index'))
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def registration_required(f):
    """Decorator to block sign-ups when REGISTRATION_ENABLED is off"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_app.config.get('REGISTRATION_ENABLED'):
            if request.path.startswith('/api/'):
                abort(403, description='Registration is disabled')
            flash('Registration is currently disabled.', 'warning')
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function


__all__ = ['rate_limited', 'registration_required']

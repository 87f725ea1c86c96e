"""
Security Module - Client IP lookup, rate limiting, password hashing and audit logging
"""

import logging
import threading
import time
from flask import request, current_app
from werkzeug.security import generate_password_hash, check_password_hash

audit_logger = logging.getLogger('portfolio.audit')

_rate_limit_lock = threading.Lock()


def get_client_ip():
    """Get the client IP address

    ProxyFix in create_app() sets remote_addr from the last PROXY_FIX_X_FOR
    X-Forwarded-For entries only; earlier entries are client-supplied.
    """
    return request.remote_addr or 'unknown'


def _rate_limit_requests():
    # One bucket per application instance: {ip: [(timestamp, endpoint), ...]}
    return current_app.extensions.setdefault('rate_limit_requests', {})


def check_rate_limit(endpoint='contact'):
    """Check if the client IP is within the rate limit for an endpoint"""
    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', 10)
    window = current_app.config.get('RATE_LIMIT_WINDOW', 60)
    client_ip = get_client_ip()
    current_time = time.time()

    with _rate_limit_lock:
        requests_by_ip = _rate_limit_requests()

        # Clean old requests outside the window
        recent = [
            (ts, ep) for ts, ep in requests_by_ip.get(client_ip, [])
            if current_time - ts < window
        ]

        endpoint_requests = [ep for ts, ep in recent if ep == endpoint]
        if len(endpoint_requests) >= max_requests:
            requests_by_ip[client_ip] = recent
            current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {endpoint}")
            return False

        recent.append((current_time, endpoint))
        requests_by_ip[client_ip] = recent
    return True


def log_audit_event(event_type, username=None, details=''):
    """Log high-level audit events for administrative review"""
    try:
        client_ip = get_client_ip()
        user_agent = request.headers.get('User-Agent', 'Unknown')[:100]
    except RuntimeError:
        # Called outside a request (CLI commands)
        client_ip, user_agent = 'local', 'cli'
    audit_logger.info(
        f"event={event_type} username={username or '-'} ip={client_ip} "
        f"agent={user_agent!r} details={details!r}"
    )


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'log_audit_event',
    'hash_password',
    'verify_password'
]

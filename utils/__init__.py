"""
Utils Package - Shared helpers for routes, storage and CLI

Only leaf modules are re-exported here; auth, data and helpers depend on
schemas and storage and are imported from their own modules.
"""

from .badges import (
    STATUS_BADGES,
    PROJECT_TYPES,
    SKILL_CATEGORIES,
    get_status_badge,
    get_project_type_label,
    get_skill_category_info
)
from .security import (
    get_client_ip,
    check_rate_limit,
    log_audit_event,
    hash_password,
    verify_password
)
from .decorators import rate_limited, registration_required
from .notifications import send_telegram_notification, notify_new_message

__all__ = [
    # Badges
    'STATUS_BADGES',
    'PROJECT_TYPES',
    'SKILL_CATEGORIES',
    'get_status_badge',
    'get_project_type_label',
    'get_skill_category_info',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'log_audit_event',
    'hash_password',
    'verify_password',

    # Decorators
    'rate_limited',
    'registration_required',

    # Notifications
    'send_telegram_notification',
    'notify_new_message'
]

"""
Badges Module - Project status badges, project types and skill categories
Single source for the choices the schemas accept and the labels the templates show
"""

STATUS_BADGES = {
    'draft': {
        'label': 'Draft',
        'icon': 'fa-pencil-alt',
        'text_color': '#6b7280',
        'bg_color': 'rgba(107, 114, 128, 0.1)'
    },
    'in progress': {
        'label': 'In Progress',
        'icon': 'fa-spinner',
        'text_color': '#f59e0b',
        'bg_color': 'rgba(245, 158, 11, 0.1)'
    },
    'live': {
        'label': 'Live',
        'icon': 'fa-check-circle',
        'text_color': '#10b981',
        'bg_color': 'rgba(16, 185, 129, 0.1)'
    },
    'archived': {
        'label': 'Archived',
        'icon': 'fa-archive',
        'text_color': '#ef4444',
        'bg_color': 'rgba(239, 68, 68, 0.1)'
    }
}

PROJECT_TYPES = {
    'web': 'Web Application',
    'mobile': 'Mobile App',
    'design': 'UI/UX Design',
    'other': 'Other'
}

# Order matters: the public site renders the categories in this order
SKILL_CATEGORIES = {
    'frontend': {'label': 'Frontend', 'icon': 'fa-laptop-code'},
    'backend': {'label': 'Backend', 'icon': 'fa-server'},
    'database': {'label': 'Database', 'icon': 'fa-database'},
    'tooling': {'label': 'Tools & DevOps', 'icon': 'fa-tools'}
}

DEFAULT_STATUS = 'draft'


def get_status_badge(status):
    """
    Get badge information for a project status

    Args:
        status (str): Project status, case-insensitive

    Returns:
        dict: Badge information, the draft badge for unknown statuses
    """
    return STATUS_BADGES.get((status or '').lower(), STATUS_BADGES[DEFAULT_STATUS])


def get_project_type_label(project_type):
    return PROJECT_TYPES.get(project_type, '')


def get_skill_category_info(category):
    return SKILL_CATEGORIES.get(category, {'label': (category or '').title(), 'icon': 'fa-code'})


__all__ = [
    'STATUS_BADGES',
    'PROJECT_TYPES',
    'SKILL_CATEGORIES',
    'DEFAULT_STATUS',
    'get_status_badge',
    'get_project_type_label',
    'get_skill_category_info'
]

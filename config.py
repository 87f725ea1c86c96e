import os
from datetime import timedelta


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    REMEMBER_COOKIE_DURATION = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Storage Settings: 'memory' keeps everything in process, 'database' uses SQLAlchemy
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory')

    _database_url = os.environ.get('DATABASE_URL')
    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    } if SQLALCHEMY_DATABASE_URI.startswith('postgresql') else {}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Portfolio Settings
    # Anonymous visitors see the content of this user
    PORTFOLIO_OWNER_ID = int(os.environ.get('PORTFOLIO_OWNER_ID', '1'))
    PORTFOLIO_SEED_FILE = os.environ.get('PORTFOLIO_SEED_FILE')
    REGISTRATION_ENABLED = _env_flag('REGISTRATION_ENABLED', True)

    # Owner account bootstrap
    OWNER_USERNAME = os.environ.get('OWNER_USERNAME')
    OWNER_PASSWORD = os.environ.get('OWNER_PASSWORD')
    OWNER_NAME = os.environ.get('OWNER_NAME', 'Portfolio Owner')
    OWNER_TITLE = os.environ.get('OWNER_TITLE', 'Developer')

    # Owner Notification Settings
    OWNER_TELEGRAM_BOT_TOKEN = os.environ.get('OWNER_TELEGRAM_BOT_TOKEN')
    OWNER_TELEGRAM_CHAT_ID = os.environ.get('OWNER_TELEGRAM_CHAT_ID')

    # Rate limiting for login and the contact form
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '10'))
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', '60'))

    # Number of reverse proxies in front of the app whose X-Forwarded-For entry is trusted; 0 disables
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '1'))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    REGISTRATION_ENABLED = _env_flag('REGISTRATION_ENABLED', False)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    STORAGE_BACKEND = 'memory'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite runs on a StaticPool, which rejects pool_size
    SQLALCHEMY_ENGINE_OPTIONS = {}
    REGISTRATION_ENABLED = True
    PORTFOLIO_SEED_FILE = None
    OWNER_USERNAME = None
    OWNER_PASSWORD = None
    OWNER_TELEGRAM_BOT_TOKEN = None
    OWNER_TELEGRAM_CHAT_ID = None
    RATE_LIMIT_MAX_REQUESTS = 10
    RATE_LIMIT_WINDOW = 60


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])

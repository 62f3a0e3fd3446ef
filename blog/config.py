"""
Configuration settings for the blog backend
"""
import os


class Config:
    """Base Flask application configuration"""

    ENV_NAME = 'base'

    # Session secret. Never hardcoded; see create_app for the missing-key policy.
    SECRET_KEY = os.environ.get('SECRET_KEY')
    REQUIRE_SECRET_KEY = True

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'blog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Passwords
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256'

    # Server
    PORT = int(os.environ.get('PORT', 3000))

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(basedir, 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_FILE = True

    # Session cookie
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Local development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    REQUIRE_SECRET_KEY = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    SESSION_COOKIE_SECURE = True


class TestConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_TO_FILE = False
    # Cheap hashes keep the suite fast
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestConfig,
}


def get_config(name=None):
    """Resolve a config class from a name or the BLOG_ENV variable."""
    name = name or os.environ.get('BLOG_ENV', 'development')
    try:
        return config_by_name[name]
    except KeyError:
        raise ValueError(f'Unknown BLOG_ENV {name!r}; expected one of {sorted(config_by_name)}')

"""
Blog Backend - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os
import secrets
from logging.handlers import RotatingFileHandler

import click
from flask import Flask

from blog.config import get_config
from blog.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: resolved from BLOG_ENV)

    Returns:
        Configured Flask application instance, with the schema created
    """
    if config_class is None:
        config_class = get_config()

    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)
    _ensure_secret_key(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = None

    # Register blueprints
    from blog.auth import auth_bp
    from blog.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)

    from blog.errors import register_error_handlers
    register_error_handlers(app)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(token):
        from blog.auth.services import deserialize_identity
        from blog.errors import IdentityNotFound
        try:
            return deserialize_identity(token)
        except IdentityNotFound:
            return None

    _register_cli(app)

    # Schema must exist before the app serves requests
    with app.app_context():
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and ':memory:' not in uri:
            os.makedirs(os.path.dirname(uri[len('sqlite:///'):]) or '.', exist_ok=True)
        _enable_sqlite_foreign_keys()
        db.create_all()
        logger.info('Database schema ready (%s)', config_class.ENV_NAME)

    return app


def _configure_logging(app):
    """Set the level on app.logger and attach one rotating file handler.

    app.logger is the `blog` logger, so module loggers under `blog.*` share it.
    """
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    app.logger.setLevel(level)

    if app.config.get('LOG_TO_FILE') and not app.testing:
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.abspath(os.path.join(log_dir, 'blog.log'))
        if not _has_file_handler(app.logger, log_path):
            file_handler = RotatingFileHandler(log_path, maxBytes=10240, backupCount=10)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'))
            file_handler.setLevel(level)
            app.logger.addHandler(file_handler)

    app.logger.info('Blog startup (%s)', app.config.get('ENV_NAME'))


def _has_file_handler(target, log_path):
    return any(isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_path
               for handler in target.handlers)


def _ensure_secret_key(app):
    if app.config.get('SECRET_KEY'):
        return
    if app.config.get('REQUIRE_SECRET_KEY', True):
        raise RuntimeError('SECRET_KEY is not set; export it before starting the server')
    app.logger.warning('SECRET_KEY is not set; using a random key, sessions end on restart')
    app.config['SECRET_KEY'] = secrets.token_hex(32)


def _enable_sqlite_foreign_keys():
    """Turn on FK enforcement for SQLite connections."""
    from sqlalchemy import event

    engine = db.engine
    if engine.dialect.name != 'sqlite':
        return

    @event.listens_for(engine, 'connect')
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def _register_cli(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.password_option()
    def create_user_command(username, password):
        """Create a user that can sign in."""
        from blog.errors import BlogError
        from blog.models import User
        from blog.services import save
        try:
            user = save(User, {'username': username, 'password': password})
        except BlogError as err:
            raise click.ClickException(f'Could not create user: {err}')
        click.echo(f'Created user {user.username} (id {user.id}).')

"""
Flask Extensions

Created here and bound to the application inside the factory so blueprints
and services can import them without circular imports.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Session-based login manager
login_manager = LoginManager()

"""
Auth Blueprint

Login page, login form handling and logout.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from blog.auth import routes  # noqa: E402, F401

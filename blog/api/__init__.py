"""
API Blueprint

JSON endpoints for users, posts and comments. Every route sits behind
login_required.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from blog.api import routes  # noqa: E402, F401

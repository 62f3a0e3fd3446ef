"""
Error taxonomy

Every failure a handler can report maps to one of these classes. Each carries
the HTTP status and a message that is safe to show the client; internal
detail stays in the server log.
"""

import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class BlogError(Exception):
    status_code = 500
    message = 'Internal Server Error'

    def __init__(self, detail=None):
        super().__init__(detail or self.message)
        self.detail = detail


class ValidationFailure(BlogError):
    """Empty or malformed request payload."""
    status_code = 400
    message = 'Bad Request'


class NotFound(BlogError):
    status_code = 404
    message = 'Not Found'


class IdentityNotFound(NotFound):
    """A session token that no longer resolves to a user."""


class StoreError(BlogError):
    """Any unclassified persistence failure."""


class AuthFailure(BlogError):
    """Login failures. Reported through a redirect and flash, never a status."""
    status_code = 401
    message = 'Invalid username or password.'


class InvalidCredentials(AuthFailure):
    """Unknown username or wrong password. The two are deliberately one type."""


class AuthStoreError(AuthFailure):
    message = 'Sign-in is unavailable right now. Please try again.'


def register_error_handlers(app):
    """Render BlogError subclasses as JSON with their status code."""

    @app.errorhandler(BlogError)
    def handle_blog_error(err):
        if err.status_code >= 500:
            logger.error('%s: %s', type(err).__name__, err.detail or err.message)
        return jsonify(error=err.message), err.status_code

"""
Authentication Service

Credential verification and the session token round trip used by
Flask-Login.
"""

import logging
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from blog.errors import AuthStoreError, IdentityNotFound, InvalidCredentials, StoreError
from blog.extensions import db
from blog.models import User
from blog.models.user import password_hash_method

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _decoy_hash(method):
    return generate_password_hash('decoy-password', method=method)


def verify(username, password):
    """Check a username/password pair against the stored hash.

    Returns:
        The matching User.

    Raises:
        InvalidCredentials: Unknown username or wrong password (same type for both).
        AuthStoreError: The user lookup failed; authentication fails closed.
    """
    if not username or not password:
        raise InvalidCredentials('missing credentials')

    try:
        user = User.query.filter_by(username=username).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Credential lookup failed')
        raise AuthStoreError(str(exc)) from exc

    if user is None:
        # Spend one hash check so unknown usernames take as long as bad passwords
        check_password_hash(_decoy_hash(password_hash_method()), password)
        logger.info('Failed login attempt')
        raise InvalidCredentials()

    if not user.check_password(password):
        logger.info('Failed login attempt')
        raise InvalidCredentials()

    return user


def serialize_identity(user):
    """Reduce an authenticated user to the token stored in the session."""
    return str(user.id)


def deserialize_identity(token):
    """Re-fetch the user a session token points at.

    Raises:
        IdentityNotFound: Malformed token or the user no longer exists.
        StoreError: The lookup itself failed.
    """
    try:
        user_id = int(token)
    except (TypeError, ValueError):
        raise IdentityNotFound(f'malformed session token {token!r}')

    try:
        user = db.session.get(User, user_id)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Session user lookup failed')
        raise StoreError(str(exc)) from exc

    if user is None:
        raise IdentityNotFound(f'user {user_id} no longer exists')
    return user

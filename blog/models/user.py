"""
User Model
"""

from flask import current_app, has_app_context
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from blog.extensions import db

PASSWORD_HASH_METHOD = 'pbkdf2:sha256'


def password_hash_method():
    """Hash method from config, falling back to the default."""
    if has_app_context():
        return current_app.config.get('PASSWORD_HASH_METHOD', PASSWORD_HASH_METHOD)
    return PASSWORD_HASH_METHOD


class User(UserMixin, db.Model):
    """Blog account. Also the identity Flask-Login keeps in the session."""
    __tablename__ = 'users'

    # Keys a client may send on save. `password` is plaintext and gets hashed.
    writable_fields = ('id', 'username', 'password')
    references = {}

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())

    posts = db.relationship('Post', back_populates='author', lazy=True)
    comments = db.relationship('Comment', back_populates='user', lazy=True)

    def get_id(self):
        from blog.auth.services import serialize_identity
        return serialize_identity(self)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method=password_hash_method())

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self, include=()):
        # password_hash never leaves the server
        return {
            'id': self.id,
            'username': self.username,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'


def _iso(value):
    return value.isoformat() if value else None

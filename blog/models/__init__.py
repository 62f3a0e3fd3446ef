"""
Models Package

Exports all models for easy importing.
"""

from blog.models.user import User
from blog.models.post import Post
from blog.models.comment import Comment

MODELS = {'User': User, 'Post': Post, 'Comment': Comment}

__all__ = ['User', 'Post', 'Comment', 'MODELS']

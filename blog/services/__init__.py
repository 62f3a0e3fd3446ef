"""
Services Package

Exports all services for easy importing.
"""

from blog.services.entities import (
    save,
    fetch_by_id,
    list_all,
    fetch_user,
    fetch_post,
    fetch_comment,
    list_posts,
    POST_RELATIONS,
)

__all__ = [
    'save',
    'fetch_by_id',
    'list_all',
    'fetch_user',
    'fetch_post',
    'fetch_comment',
    'list_posts',
    'POST_RELATIONS',
]

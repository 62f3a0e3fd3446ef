"""
Entity Service

Save, fetch and list operations shared by User, Post and Comment. Functions
raise BlogError subclasses; the routes let them propagate to the registered
error handler.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from blog.errors import NotFound, StoreError, ValidationFailure
from blog.extensions import db
from blog.models import MODELS, User, Post, Comment

logger = logging.getLogger(__name__)

# Relations eagerly loaded when fetching a single row
POST_RELATIONS = ('author', 'comments')


def save(model, fields):
    """Insert a row, or update it when `fields` carries an existing `id`.

    Args:
        model: One of the mapped entity classes.
        fields: Mapping of column values from the request body.

    Returns:
        The persisted entity with its identifier assigned.

    Raises:
        ValidationFailure: Empty payload, or a reference that is missing on insert
            or points at no row.
        StoreError: Unknown columns, missing row on update, or any database error.
    """
    if not fields or not isinstance(fields, dict):
        raise ValidationFailure(f'empty {model.__name__} payload')

    unknown = set(fields) - set(model.writable_fields)
    if unknown:
        raise StoreError(f'{model.__tablename__} has no column(s) {sorted(unknown)}')

    fields = dict(fields)
    entity_id = fields.pop('id', None)

    try:
        _check_references(model, fields, inserting=entity_id is None)
        if entity_id is None:
            entity = model()
        else:
            entity = db.session.get(model, entity_id)
            if entity is None:
                raise StoreError(f'{model.__name__} {entity_id!r}: no row to update')
        _assign(entity, fields)
        db.session.add(entity)
        db.session.commit()
    except (ValidationFailure, StoreError):
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Could not save %s', model.__name__)
        raise StoreError(str(exc)) from exc

    logger.info('Saved %s %s', model.__name__, entity.id)
    return entity


def fetch_by_id(model, entity_id, with_related=()):
    """Load one row by primary key, eager-loading the named relations."""
    options = [selectinload(getattr(model, name)) for name in with_related]
    try:
        entity = db.session.get(model, entity_id, options=options)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Could not fetch %s %s', model.__name__, entity_id)
        raise StoreError(str(exc)) from exc

    if entity is None:
        raise NotFound(f'{model.__name__} {entity_id}')
    return entity


def list_all(model):
    """Every row of the table, ordered by id. Unpaginated."""
    try:
        return model.query.order_by(model.id).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Could not list %s', model.__tablename__)
        raise StoreError(str(exc)) from exc


def fetch_user(user_id):
    return fetch_by_id(User, user_id)


def fetch_post(post_id):
    return fetch_by_id(Post, post_id, with_related=POST_RELATIONS)


def fetch_comment(comment_id):
    return fetch_by_id(Comment, comment_id)


def list_posts():
    return list_all(Post)


def _check_references(model, fields, inserting):
    for field, target_name in model.references.items():
        if field not in fields:
            # Every reference column is NOT NULL, so an insert must carry it
            if inserting:
                raise ValidationFailure(f'{model.__name__} needs {field}')
            continue
        value = fields[field]
        if value is None or db.session.get(MODELS[target_name], value) is None:
            raise ValidationFailure(f'{field}={value!r} does not reference an existing {target_name}')


def _assign(entity, fields):
    for key, value in fields.items():
        if key == 'password':
            if not isinstance(value, str) or not value:
                raise ValidationFailure('password must be a non-empty string')
            entity.set_password(value)
        else:
            setattr(entity, key, value)

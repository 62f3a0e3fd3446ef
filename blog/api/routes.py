"""
API Routes

Create and read endpoints for the three entities.
"""

from flask import request, jsonify
from flask_login import login_required

from blog.api import api_bp
from blog.models import User, Post, Comment
from blog.services import save, fetch_user, fetch_post, list_posts as list_all_posts, POST_RELATIONS


def _payload():
    """Request body as a dict: JSON first, then form fields."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data


@api_bp.route('/user/<int:user_id>')
@login_required
def get_user(user_id):
    return jsonify(fetch_user(user_id).to_dict())


@api_bp.route('/user', methods=['POST'])
@login_required
def create_user():
    user = save(User, _payload())
    return jsonify(id=user.id)


@api_bp.route('/posts')
@login_required
def list_posts():
    return jsonify([post.to_dict() for post in list_all_posts()])


@api_bp.route('/post/<int:post_id>')
@login_required
def get_post(post_id):
    return jsonify(fetch_post(post_id).to_dict(include=POST_RELATIONS))


@api_bp.route('/post', methods=['POST'])
@login_required
def create_post():
    post = save(Post, _payload())
    return jsonify(id=post.id)


@api_bp.route('/comment', methods=['POST'])
@login_required
def create_comment():
    comment = save(Comment, _payload())
    return jsonify(id=comment.id)

"""
Auth Routes

Session login and logout using Flask-Login.
"""

import logging

from flask import render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user

from blog.auth import auth_bp
from blog.auth.services import verify
from blog.errors import AuthFailure

logger = logging.getLogger(__name__)


@auth_bp.route('/login', methods=['GET'])
def login():
    """Render the login page with any flashed errors"""
    if current_user.is_authenticated:
        return redirect(url_for('api.list_posts'))
    return render_template('auth/login.html')


@auth_bp.route('/login', methods=['POST'])
def login_submit():
    """Verify the submitted credentials and start a session"""
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')

    try:
        user = verify(username, password)
    except AuthFailure as err:
        flash(err.message, 'danger')
        return redirect(url_for('auth.login'))

    login_user(user)
    logger.info('User %s logged in', user.id)
    return redirect(url_for('api.list_posts'))


@auth_bp.route('/logout')
@login_required
def logout():
    """End the session"""
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))

from flask import redirect, render_template, request, url_for

from quillpress.core.logging_service import logger

from . import auth_bp
from .utils import clear_auth_cookie, set_auth_cookie, verify_credentials


@auth_bp.route('/admin')
def login_page():
    """Admin login form"""
    return render_template('auth/login.html')


@auth_bp.route('/login', methods=['POST'])
def login():
    username = request.form.get('username', '')
    password = request.form.get('password', '')

    if verify_credentials(username, password):
        logger.log_user_action('auth', 'login')
        response = redirect(url_for('posts_admin.dashboard'))
        return set_auth_cookie(response)

    logger.log_security_event('Failed admin login', {'username': username})
    return 'Login Failed', 401, {'Content-Type': 'text/plain; charset=utf-8'}


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the session cookie whether or not one was set"""
    logger.log_user_action('auth', 'logout')
    response = redirect(url_for('auth.login_page'))
    return clear_auth_cookie(response)

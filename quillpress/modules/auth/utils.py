import hmac
from functools import wraps

from flask import Response, current_app, request, url_for
from werkzeug.security import check_password_hash, generate_password_hash

from quillpress.core.config import get_config_value

AUTH_COOKIE = 'auth'
AUTH_VALUE = 'true'

DEFAULT_DEV_PASSWORD = 'admin123'


def configure_credentials(app):
    """Resolve the admin password hash once at startup.

    ADMIN_PASSWORD_HASH is used as given; otherwise ADMIN_PASSWORD (or the dev default) is hashed.
    """
    if app.config.get('ADMIN_PASSWORD_HASH'):
        return
    password = app.config.get('ADMIN_PASSWORD') or get_config_value('ADMIN_PASSWORD')
    if not password:
        print("[AUTH] No ADMIN_PASSWORD or ADMIN_PASSWORD_HASH set, using the development default")
        password = DEFAULT_DEV_PASSWORD
    app.config['ADMIN_PASSWORD_HASH'] = generate_password_hash(password)
    app.config.pop('ADMIN_PASSWORD', None)


def verify_credentials(username, password):
    """Exact match on the configured admin identity, compared in constant time"""
    expected_username = current_app.config.get('ADMIN_USERNAME') or get_config_value('ADMIN_USERNAME', 'admin')
    password_hash = current_app.config.get('ADMIN_PASSWORD_HASH')

    username_ok = hmac.compare_digest((username or '').encode(), expected_username.encode())
    # Always run the hash check so a wrong username costs the same time
    password_ok = bool(password_hash) and check_password_hash(password_hash, password or '')
    return username_ok and password_ok


def is_authenticated():
    """True iff the request carries the cookie auth=true (parsed, exact key and value)"""
    return request.cookies.get(AUTH_COOKIE) == AUTH_VALUE


def set_auth_cookie(response):
    response.set_cookie(
        AUTH_COOKIE, AUTH_VALUE,
        max_age=get_config_value('SESSION_MAX_AGE', 86400),
        path='/', httponly=True, secure=True, samesite='Strict',
    )
    return response


def clear_auth_cookie(response):
    response.set_cookie(
        AUTH_COOKIE, '',
        max_age=0,
        path='/', httponly=True, secure=True, samesite='Strict',
    )
    return response


def admin_page_required(f):
    """Decorator for admin HTML pages: redirect to the login page"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return Response(status=302, headers={'Location': url_for('auth.login_page')})
        return f(*args, **kwargs)
    return decorated_function


def admin_api_required(f):
    """Decorator for admin actions: plain 401, no redirect"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return 'Unauthorized', 401
        return f(*args, **kwargs)
    return decorated_function

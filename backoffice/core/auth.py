"""
Admin session helpers.

The storefront API issues the bearer token; the backoffice only keeps it in
the Flask session next to the admin's user record.
"""

from functools import wraps
from flask import session, redirect, url_for, request, jsonify

TOKEN_KEY = 'admin_token'
USER_KEY = 'admin_user'


def store_admin_session(token, user):
    session[TOKEN_KEY] = token
    session[USER_KEY] = user


def clear_admin_session():
    session.pop(TOKEN_KEY, None)
    session.pop(USER_KEY, None)


def get_admin_token():
    return session.get(TOKEN_KEY)


def get_admin_user():
    """Get the current admin user, or None"""
    user = session.get(USER_KEY)
    return user if isinstance(user, dict) else None


def is_authenticated():
    return bool(session.get(TOKEN_KEY))


def is_admin():
    """Check if the current user holds the admin role"""
    user = get_admin_user()
    return bool(user) and user.get('role') == 'admin'


def login_required(f):
    """Decorator for admin pages"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return redirect(url_for('admin.login', next=request.path))
        if not is_admin():
            return redirect(url_for('admin.unauthorized'))
        return f(*args, **kwargs)
    return decorated_function


def api_login_required(f):
    """Decorator for admin JSON endpoints"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        if not is_admin():
            return jsonify({'success': False, 'error': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated_function

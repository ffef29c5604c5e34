"""
Admin Dashboard Routes
======================

Authentication and dashboard interface for admin users.
Credentials are checked by the storefront API; only accounts with the
admin role get a session.
"""

from flask import render_template, request, redirect, url_for, flash, jsonify
from backoffice.core.api_client import StorefrontAPI, APIError, get_api
from backoffice.core.auth import (login_required, api_login_required, store_admin_session,
                                  clear_admin_session, get_admin_user, is_authenticated)
from backoffice.core.config import get_config_value
from backoffice.core.logging_service import LoggingService
from . import dashboard_bp

# Collections counted on the dashboard: (key, API path)
STAT_SOURCES = [
    ('products', '/products'),
    ('orders', '/orders'),
    ('blogs', '/blogs'),
    ('testimonials', '/testimonials/admin/all'),
]

MAX_LOG_ROWS = 500


def collect_stats(api):
    """Count each collection; one that fails to load counts as 0"""
    stats = {}
    for key, path in STAT_SOURCES:
        try:
            stats[key] = api.count_collection(path)
        except APIError as e:
            LoggingService.warning('dashboard', f"Error fetching {key} count: {e.message}")
            stats[key] = 0
    return stats


def _safe_next(next_page):
    # Only relative paths on this site
    if next_page and next_page.startswith('/') and not next_page.startswith('//'):
        return next_page
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html')

        api = StorefrontAPI(
            base_url=get_config_value('API_BASE_URL'),
            timeout=int(get_config_value('API_TIMEOUT', 15))
        )

        try:
            token, user = api.login(email, password, get_config_value('API_LOGIN_PATH', '/auth/login'))
        except APIError as e:
            LoggingService.log_security_event('Failed admin login', {'email': email, 'error': e.message})
            flash('Invalid email or password', 'error')
            return render_template('dashboard/login.html')

        if user.get('role') != 'admin':
            LoggingService.log_security_event('Non-admin login refused', {'email': email})
            clear_admin_session()
            return redirect(url_for('admin.unauthorized'))

        store_admin_session(token, user)
        LoggingService.log_user_action('auth', 'Admin login', user_id=email)
        flash('Login successful', 'success')

        next_page = _safe_next(request.args.get('next'))
        return redirect(next_page or url_for('admin.dashboard'))

    if is_authenticated() and get_admin_user():
        return redirect(url_for('admin.dashboard'))

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    admin_user = get_admin_user() or {}
    clear_admin_session()
    LoggingService.log_user_action('auth', 'Admin logout', user_id=admin_user.get('email', 'Unknown'))
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/unauthorized')
def unauthorized():
    """Access denied page for signed-in users without the admin role"""
    clear_admin_session()
    return render_template('dashboard/unauthorized.html'), 403


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@login_required
def dashboard():
    """Admin dashboard with collection counts"""
    return render_template('dashboard/dashboard.html', stats=collect_stats(get_api()))


@dashboard_bp.route('/api/stats')
@api_login_required
def api_stats():
    return jsonify({'success': True, 'stats': collect_stats(get_api())})


@dashboard_bp.route('/api/logs')
@api_login_required
def api_logs():
    """Recent application log entries"""
    limit = max(1, min(request.args.get('limit', 50, type=int), MAX_LOG_ROWS))
    level = request.args.get('level')
    return jsonify({'success': True, 'logs': LoggingService.get_recent_logs(limit, level)})

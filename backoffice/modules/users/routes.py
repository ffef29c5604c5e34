"""
Users Admin Routes
==================

The users endpoint has returned several payload shapes over time, so each
record is normalised before it reaches the template.
"""

from flask import render_template, request, jsonify, flash
from backoffice.core.api_client import APIError, get_api
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.logging_service import LoggingService
from backoffice.core.utils import json_body
from . import users_bp


def normalize_user(user):
    """Map the different user record shapes onto one"""
    if 'isActive' in user:
        is_active = bool(user['isActive'])
    elif 'status' in user:
        is_active = str(user['status']).lower() == 'active'
    else:
        is_active = True

    return {
        'id': user.get('_id') or user.get('id'),
        'name': user.get('name') or user.get('fullName') or user.get('username') or 'Unknown',
        'email': user.get('email') or '',
        'phone': user.get('phone') or user.get('phoneNumber') or '',
        'role': user.get('role') or user.get('userType') or 'user',
        'created_at': (user.get('createdAt') or user.get('created') or user.get('dateCreated') or '')[:10],
        'is_active': is_active,
    }


def search_users(users, term):
    """Case-insensitive match on name or email"""
    term = (term or '').strip().lower()
    if not term:
        return users
    return [u for u in users if term in u['name'].lower() or term in u['email'].lower()]


@users_bp.route('/')
@login_required
def users_manager():
    """Registered users page"""
    search = request.args.get('q', '').strip()
    try:
        users = [normalize_user(u) for u in get_api().list_collection('/users', auth=True)]
    except APIError as e:
        LoggingService.error('users', f"Error fetching users: {e.message}", {'status_code': e.status_code})
        flash('Could not load users from the storefront API.', 'error')
        users = []

    return render_template('users/users.html', users=search_users(users, search),
                           total=len(users), search=search)


@users_bp.route('/api/user/<user_id>/toggle', methods=['POST'])
@api_login_required
def api_toggle_user(user_id):
    """Flip a user's isActive flag, given its current value"""
    data = json_body()
    if 'isActive' not in data:
        return jsonify({'success': False, 'error': 'isActive is required'}), 400

    is_active = not bool(data['isActive'])
    try:
        get_api().put(f"/users/{user_id}", {'isActive': is_active})
    except APIError as e:
        LoggingService.log_error_with_traceback('users', e, {'user_id': user_id})
        return jsonify({'success': False, 'error': 'Failed to update user. Please try again.'}), 502

    LoggingService.log_user_action('users', f"Set isActive of user {user_id} to {is_active}")
    return jsonify({'success': True, 'is_active': is_active})

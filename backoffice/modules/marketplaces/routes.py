"""
Marketplaces Admin Routes
=========================
"""

from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api, get_image_url
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.logging_service import LoggingService
from backoffice.core.utils import json_body
from . import marketplaces_bp

# The public listing hides inactive platforms; the admin needs all of them
MARKETPLACES_PATH = '/marketplaces?all=true'


def summarize_marketplace(marketplace):
    return {
        'id': marketplace.get('_id'),
        'name': marketplace.get('name', ''),
        'logo': get_image_url(marketplace.get('logo')),
        'url': marketplace.get('url', ''),
        'order': marketplace.get('order', ''),
        'is_active': bool(marketplace.get('isActive')),
    }


@marketplaces_bp.route('/')
@login_required
def marketplaces_manager():
    """Marketplaces page"""
    try:
        marketplaces = get_api().list_collection(MARKETPLACES_PATH)
    except APIError as e:
        LoggingService.error('marketplaces', f"Error fetching marketplaces: {e.message}")
        flash('Could not load marketplaces from the storefront API.', 'error')
        marketplaces = []

    return render_template('marketplaces/marketplaces.html',
                           marketplaces=[summarize_marketplace(m) for m in marketplaces])


@marketplaces_bp.route('/api/marketplace/<marketplace_id>/toggle', methods=['POST'])
@api_login_required
def api_toggle_marketplace(marketplace_id):
    """Flip a marketplace's isActive flag, given its current value"""
    data = json_body()
    if 'isActive' not in data:
        return jsonify({'success': False, 'error': 'isActive is required'}), 400

    is_active = not bool(data['isActive'])
    try:
        get_api().put(f"/marketplaces/{marketplace_id}", {'isActive': is_active})
    except APIError as e:
        LoggingService.log_error_with_traceback('marketplaces', e, {'marketplace_id': marketplace_id})
        return jsonify({'success': False, 'error': 'Failed to update marketplace. Please try again.'}), 502

    LoggingService.log_user_action('marketplaces',
                                   f"Set isActive of marketplace {marketplace_id} to {is_active}")
    return jsonify({'success': True, 'is_active': is_active})


@marketplaces_bp.route('/api/marketplace/<marketplace_id>/delete', methods=['POST'])
@api_login_required
def api_delete_marketplace(marketplace_id):
    try:
        get_api().delete(f"/marketplaces/{marketplace_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('marketplaces', e, {'marketplace_id': marketplace_id})
        return jsonify({'success': False, 'error': 'Failed to remove marketplace. Please try again.'}), 502

    LoggingService.log_user_action('marketplaces', f"Deleted marketplace {marketplace_id}")
    return jsonify({'success': True})

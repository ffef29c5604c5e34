"""
Banners Admin Routes
====================
"""

from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api, get_image_url
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.logging_service import LoggingService
from backoffice.core.utils import json_body
from . import banners_bp


def summarize_banner(banner):
    return {
        'id': banner.get('_id'),
        'title': banner.get('title', ''),
        'image': get_image_url(banner.get('image')),
        'link': banner.get('link') or '',
        'position': banner.get('position') or 'N/A',
        'is_active': bool(banner.get('isActive')),
    }


@banners_bp.route('/')
@login_required
def banners_manager():
    """Banners page"""
    try:
        banners = get_api().list_collection('/banners')
    except APIError as e:
        LoggingService.error('banners', f"Error fetching banners: {e.message}")
        flash('Could not load banners from the storefront API.', 'error')
        banners = []

    return render_template('banners/banners.html', banners=[summarize_banner(b) for b in banners])


@banners_bp.route('/api/banner/<banner_id>/toggle', methods=['POST'])
@api_login_required
def api_toggle_banner(banner_id):
    """Flip a banner's isActive flag, given its current value"""
    data = json_body()
    if 'isActive' not in data:
        return jsonify({'success': False, 'error': 'isActive is required'}), 400

    is_active = not bool(data['isActive'])
    try:
        get_api().put(f"/banners/{banner_id}", {'isActive': is_active})
    except APIError as e:
        LoggingService.log_error_with_traceback('banners', e, {'banner_id': banner_id})
        return jsonify({'success': False, 'error': 'Failed to update banner. Please try again.'}), 502

    LoggingService.log_user_action('banners', f"Set isActive of banner {banner_id} to {is_active}")
    return jsonify({'success': True, 'is_active': is_active})


@banners_bp.route('/api/banner/<banner_id>/delete', methods=['POST'])
@api_login_required
def api_delete_banner(banner_id):
    try:
        get_api().delete(f"/banners/{banner_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('banners', e, {'banner_id': banner_id})
        return jsonify({'success': False, 'error': 'Failed to delete banner. Please try again.'}), 502

    LoggingService.log_user_action('banners', f"Deleted banner {banner_id}")
    return jsonify({'success': True})

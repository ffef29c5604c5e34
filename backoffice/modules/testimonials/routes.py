"""
Testimonials Admin Routes
=========================
"""

from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api, get_image_url
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.logging_service import LoggingService
from backoffice.core.utils import json_body
from . import testimonials_bp


def summarize_testimonial(testimonial):
    rating = int(testimonial.get('rating') or 0)
    rating = max(0, min(rating, 5))
    return {
        'id': testimonial.get('_id'),
        'name': testimonial.get('name', ''),
        'product': testimonial.get('product', ''),
        'rating': rating,
        'stars': '★' * rating + '☆' * (5 - rating),
        'comment': testimonial.get('comment', ''),
        'image': get_image_url(testimonial.get('image')),
        'approved': bool(testimonial.get('approved')),
        'featured': bool(testimonial.get('featured')),
    }


@testimonials_bp.route('/')
@login_required
def testimonials_manager():
    try:
        testimonials = get_api().list_collection('/testimonials/admin/all')
    except APIError as e:
        LoggingService.error('testimonials', f"Error fetching testimonials: {e.message}")
        flash('Could not load testimonials from the storefront API.', 'error')
        testimonials = []

    return render_template('testimonials/testimonials.html',
                           testimonials=[summarize_testimonial(t) for t in testimonials])


@testimonials_bp.route('/api/testimonial/<testimonial_id>/toggle', methods=['POST'])
@api_login_required
def api_toggle_approval(testimonial_id):
    """Approve or unapprove, given the current approval"""
    data = json_body()
    if 'approved' not in data:
        return jsonify({'success': False, 'error': 'approved is required'}), 400

    approved = not bool(data['approved'])
    try:
        get_api().put(f"/testimonials/{testimonial_id}", {'approved': approved})
    except APIError as e:
        LoggingService.log_error_with_traceback('testimonials', e, {'testimonial_id': testimonial_id})
        return jsonify({'success': False, 'error': 'Failed to update testimonial. Please try again.'}), 502

    LoggingService.log_user_action('testimonials', f"Set approved of testimonial {testimonial_id} to {approved}")
    return jsonify({'success': True, 'approved': approved})


@testimonials_bp.route('/api/testimonial/<testimonial_id>/delete', methods=['POST'])
@api_login_required
def api_delete_testimonial(testimonial_id):
    try:
        get_api().delete(f"/testimonials/{testimonial_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('testimonials', e, {'testimonial_id': testimonial_id})
        return jsonify({'success': False, 'error': 'Failed to delete testimonial. Please try again.'}), 502

    LoggingService.log_user_action('testimonials', f"Deleted testimonial {testimonial_id}")
    return jsonify({'success': True})

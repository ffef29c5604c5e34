"""
Discounts Admin Routes
======================
"""

from datetime import datetime, timezone
from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.config import get_config_value
from backoffice.core.logging_service import LoggingService
from backoffice.core.utils import json_body
from . import discounts_bp


def parse_timestamp(value):
    """Parse an API timestamp (ISO 8601, optionally with a trailing Z) as UTC"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_expired(valid_until, now=None):
    expires = parse_timestamp(valid_until)
    if expires is None:
        return False
    return expires < (now or datetime.now(timezone.utc))


def summarize_discount(discount, currency_prefix='Rs.', now=None):
    expired = is_expired(discount.get('validUntil'), now)
    value = discount.get('value', 0)
    if discount.get('type') == 'percentage':
        value_display = f"{value}%"
    else:
        value_display = f"{currency_prefix} {value}"

    return {
        'id': discount.get('_id'),
        'code': discount.get('code', ''),
        'type': discount.get('type', ''),
        'value_display': value_display,
        'min_purchase': discount.get('minPurchase'),
        'max_discount': discount.get('maxDiscount'),
        'valid_from': (discount.get('validFrom') or '')[:10],
        'valid_until': (discount.get('validUntil') or '')[:10],
        'expired': expired,
        'is_active': bool(discount.get('isActive')),
        'is_live': bool(discount.get('isActive')) and not expired,
        'usage': f"{discount.get('usedCount') or 0} / {discount.get('usageLimit') or '∞'}",
    }


@discounts_bp.route('/')
@login_required
def discounts_manager():
    """Discount codes page"""
    currency = get_config_value('CURRENCY_PREFIX', 'Rs.')
    try:
        discounts = get_api().list_collection('/discounts')
    except APIError as e:
        LoggingService.error('discounts', f"Error fetching discounts: {e.message}")
        flash('Could not load discounts from the storefront API.', 'error')
        discounts = []

    return render_template('discounts/discounts.html',
                           discounts=[summarize_discount(d, currency) for d in discounts])


@discounts_bp.route('/api/discount/<discount_id>/toggle', methods=['POST'])
@api_login_required
def api_toggle_discount(discount_id):
    """Flip a discount's isActive flag, given its current value"""
    data = json_body()
    if 'isActive' not in data:
        return jsonify({'success': False, 'error': 'isActive is required'}), 400

    is_active = not bool(data['isActive'])
    try:
        get_api().put(f"/discounts/{discount_id}", {'isActive': is_active})
    except APIError as e:
        LoggingService.log_error_with_traceback('discounts', e, {'discount_id': discount_id})
        return jsonify({'success': False, 'error': 'Failed to update discount. Please try again.'}), 502

    LoggingService.log_user_action('discounts', f"Set isActive of discount {discount_id} to {is_active}")
    return jsonify({'success': True, 'is_active': is_active})


@discounts_bp.route('/api/discount/<discount_id>/delete', methods=['POST'])
@api_login_required
def api_delete_discount(discount_id):
    try:
        get_api().delete(f"/discounts/{discount_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('discounts', e, {'discount_id': discount_id})
        return jsonify({'success': False, 'error': 'Failed to delete discount. Please try again.'}), 502

    LoggingService.log_user_action('discounts', f"Deleted discount {discount_id}")
    return jsonify({'success': True})

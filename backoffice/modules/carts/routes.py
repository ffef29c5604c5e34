"""
Carts Admin Routes
==================
"""

from flask import render_template, request, jsonify, flash
from backoffice.core.api_client import APIError, get_api
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.config import get_config_value
from backoffice.core.logging_service import LoggingService
from backoffice.modules.orders.models import format_amount, items_summary
from . import carts_bp

CART_FILTERS = ['pending', 'active', 'all']

CART_STATUS_COLORS = {
    'pending': 'bg-yellow-100 text-yellow-800',
    'active': 'bg-blue-100 text-blue-800',
    'converted': 'bg-green-100 text-green-800',
    'expired': 'bg-gray-100 text-gray-800',
}


def fetch_carts(api, cart_filter):
    """Carts for a filter: 'all' reads everything, the rest narrow the pending feed"""
    if cart_filter == 'all':
        return api.list_collection('/cart/admin/all')
    carts = api.list_collection('/cart/admin/pending')
    return [c for c in carts if (c.get('status') or '').lower() == cart_filter]


def cart_stats(carts):
    return {
        'pending': sum(1 for c in carts if c.get('status') == 'pending'),
        'active': sum(1 for c in carts if c.get('status') == 'active'),
        'total_value': sum(c.get('total') or 0 for c in carts),
    }


def summarize_cart(cart, currency_prefix='Rs.'):
    user = cart.get('user') or {}
    shipping = cart.get('shippingAddress') or {}
    items = cart.get('items') or []
    status = cart.get('status') or ''
    return {
        'id': cart.get('_id'),
        'short_id': str(cart.get('_id') or '')[-8:],
        'session_tail': str(cart.get('sessionId') or '')[-12:],
        'customer_name': user.get('name') or 'Guest',
        'customer_email': user.get('email') or '',
        'shipping_name': shipping.get('name') or '',
        'item_count': len(items),
        'items_summary': items_summary(items),
        'total_display': format_amount(cart.get('total'), currency_prefix),
        'status': status,
        'status_color': CART_STATUS_COLORS.get(status.lower(), 'bg-gray-100 text-gray-800'),
        'payment_method': cart.get('paymentMethod') or 'N/A',
        'created_at': (cart.get('createdAt') or '')[:10],
        'expires_at': (cart.get('expiresAt') or '')[:10],
    }


def _cart_filter():
    cart_filter = request.args.get('filter', 'pending').lower()
    return cart_filter if cart_filter in CART_FILTERS else 'pending'


def _load(cart_filter):
    try:
        return fetch_carts(get_api(), cart_filter), None
    except APIError as e:
        LoggingService.error('carts', f"Error fetching carts: {e.message}")
        return [], e.message


@carts_bp.route('/')
@login_required
def carts_manager():
    cart_filter = _cart_filter()
    carts, error = _load(cart_filter)
    if error:
        flash('Could not load carts from the storefront API.', 'error')

    stats = cart_stats(carts)
    currency = get_config_value('CURRENCY_PREFIX', 'Rs.')
    stats['total_value_display'] = format_amount(stats['total_value'], currency)

    return render_template('carts/carts.html',
                           carts=[summarize_cart(c, currency) for c in carts],
                           stats=stats, cart_filter=cart_filter, filters=CART_FILTERS)


@carts_bp.route('/api/carts')
@api_login_required
def api_carts():
    cart_filter = _cart_filter()
    carts, error = _load(cart_filter)
    return jsonify({
        'success': error is None,
        'carts': [summarize_cart(c, get_config_value('CURRENCY_PREFIX', 'Rs.')) for c in carts],
        'stats': cart_stats(carts)
    })

"""
Orders Admin Routes
===================

Order list page plus the JSON endpoints the page calls when an operator
changes a status or enters a tracking number.
"""

from flask import render_template, request, jsonify, flash
from backoffice.core.api_client import get_api
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.config import get_config_value
from backoffice.core.utils import json_body
from . import orders_bp
from .manager import OrderStatusManager, OrderUpdateError, InvalidStatusError, ALL
from .models import (ORDER_STATUSES, PAYMENT_STATUSES, summarize_order,
                     order_details_text)


def _filters():
    return (
        request.args.get('status', ALL),
        request.args.get('payment', ALL),
        request.args.get('q', '').strip()
    )


@orders_bp.route('/')
@login_required
def orders_manager():
    """Order management page"""
    order_status, payment_status, search = _filters()
    currency = get_config_value('CURRENCY_PREFIX', 'Rs.')

    manager = OrderStatusManager(get_api())
    manager.list_orders()
    if manager.load_error:
        flash('Could not load orders from the storefront API.', 'error')

    rows = [summarize_order(o, currency)
            for o in manager.filtered(order_status, payment_status, search)]

    return render_template(
        'orders/orders_manager.html',
        orders=rows,
        stats=manager.stats(),
        order_statuses=ORDER_STATUSES,
        payment_statuses=PAYMENT_STATUSES,
        status_filter=order_status.lower(),
        payment_filter=payment_status.lower(),
        search=search
    )


@orders_bp.route('/api/orders')
@api_login_required
def api_orders():
    """List orders, filtered and searched"""
    order_status, payment_status, search = _filters()
    currency = get_config_value('CURRENCY_PREFIX', 'Rs.')

    manager = OrderStatusManager(get_api())
    manager.list_orders()

    return jsonify({
        'success': manager.load_error is None,
        'orders': [summarize_order(o, currency)
                   for o in manager.filtered(order_status, payment_status, search)],
        'stats': manager.stats()
    })


@orders_bp.route('/api/order/<order_id>')
@api_login_required
def api_order_details(order_id):
    """Get an order with its plain-text summary"""
    manager = OrderStatusManager(get_api())
    manager.list_orders()

    order = manager.find(order_id)
    if not order:
        return jsonify({'success': False, 'error': 'Order not found'}), 404

    return jsonify({
        'success': True,
        'order': order,
        'details': order_details_text(order, get_config_value('CURRENCY_PREFIX', 'Rs.'))
    })


def _apply(order_id, action, value):
    manager = OrderStatusManager(get_api())
    try:
        result = action(manager, order_id, value)
    except InvalidStatusError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except OrderUpdateError as e:
        return jsonify({'success': False, 'error': e.message}), 502

    if result is False:
        # Nothing was sent, so nothing was refetched either
        manager.list_orders()

    return jsonify({
        'success': True,
        'updated': result is not False,
        'orders': [summarize_order(o, get_config_value('CURRENCY_PREFIX', 'Rs.'))
                   for o in manager.orders]
    })


@orders_bp.route('/api/order/<order_id>/status', methods=['POST'])
@api_login_required
def api_set_order_status(order_id):
    data = json_body()
    if 'orderStatus' not in data:
        return jsonify({'success': False, 'error': 'orderStatus is required'}), 400
    return _apply(order_id, OrderStatusManager.set_order_status, data['orderStatus'])


@orders_bp.route('/api/order/<order_id>/payment-status', methods=['POST'])
@api_login_required
def api_set_payment_status(order_id):
    data = json_body()
    if 'paymentStatus' not in data:
        return jsonify({'success': False, 'error': 'paymentStatus is required'}), 400
    return _apply(order_id, OrderStatusManager.set_payment_status, data['paymentStatus'])


@orders_bp.route('/api/order/<order_id>/tracking', methods=['POST'])
@api_login_required
def api_set_tracking_number(order_id):
    data = json_body()
    return _apply(order_id, OrderStatusManager.set_tracking_number,
                  data.get('trackingNumber', ''))

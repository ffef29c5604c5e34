"""
Order status vocabulary and display helpers.

Orders arrive from the storefront API as plain dicts; these helpers shape
them for the admin table without changing the underlying data.
"""

ORDER_STATUSES = ['Pending', 'Processing', 'Shipped', 'Delivered', 'Cancelled']
PAYMENT_STATUSES = ['Pending', 'Paid', 'Failed']

ORDER_STATUS_COLORS = {
    'pending': 'bg-yellow-100 text-yellow-800',
    'processing': 'bg-blue-100 text-blue-800',
    'shipped': 'bg-purple-100 text-purple-800',
    'delivered': 'bg-green-100 text-green-800',
    'cancelled': 'bg-red-100 text-red-800',
}

PAYMENT_STATUS_COLORS = {
    'paid': 'bg-green-100 text-green-800',
    'pending': 'bg-yellow-100 text-yellow-800',
    'failed': 'bg-red-100 text-red-800',
}

DEFAULT_COLOR = 'bg-gray-100 text-gray-800'


def order_status_color(status):
    return ORDER_STATUS_COLORS.get((status or '').lower(), DEFAULT_COLOR)


def payment_status_color(status):
    return PAYMENT_STATUS_COLORS.get((status or '').lower(), DEFAULT_COLOR)


def canonical_status(value, allowed):
    """Match a submitted status against the allowed values, ignoring case"""
    if not isinstance(value, str):
        return None
    for status in allowed:
        if status.lower() == value.strip().lower():
            return status
    return None


def format_amount(amount, prefix='Rs.'):
    """Format a rupee amount with thousands separators: Rs. 1,299"""
    amount = amount or 0
    if isinstance(amount, float) and not amount.is_integer():
        return f"{prefix} {amount:,.2f}"
    return f"{prefix} {int(amount):,}"


def display_number(order):
    """Order number, or the tail of the id when the order has none"""
    return order.get('orderNumber') or str(order.get('_id', ''))[-8:]


def items_summary(items, limit=2):
    """First few item names, with an ellipsis when there are more"""
    items = items or []
    names = ', '.join(item.get('name', '') for item in items[:limit])
    if len(items) > limit:
        names += '...'
    return names


def payment_reference(order):
    payment_id = (order.get('paymentDetails') or {}).get('razorpay_payment_id')
    return payment_id[-8:] if payment_id else ''


def summarize_order(order, currency_prefix='Rs.'):
    """Build the row shown in the orders table"""
    user = order.get('user') or {}
    items = order.get('items') or []
    return {
        'id': order.get('_id'),
        'order_number': display_number(order),
        'customer_name': user.get('name') or 'N/A',
        'customer_email': user.get('email') or '',
        'item_count': len(items),
        'items_summary': items_summary(items),
        'amount_display': format_amount(order.get('totalAmount'), currency_prefix),
        'order_status': order.get('orderStatus', ''),
        'order_status_color': order_status_color(order.get('orderStatus')),
        'payment_status': order.get('paymentStatus', ''),
        'payment_status_color': payment_status_color(order.get('paymentStatus')),
        'payment_method': order.get('paymentMethod', ''),
        'payment_reference': payment_reference(order),
        'tracking_number': order.get('trackingNumber') or '',
        'created_at': (order.get('createdAt') or '')[:10],
    }


def order_details_text(order, currency_prefix='Rs.'):
    """Plain-text order summary shown by the View action"""
    user = order.get('user') or {}
    address = order.get('shippingAddress') or {}
    payment_id = (order.get('paymentDetails') or {}).get('razorpay_payment_id')
    items = ', '.join(f"{i.get('name', '')} x{i.get('quantity', 0)}"
                      for i in order.get('items') or [])

    lines = [
        f"Order #{display_number(order)}",
        f"Customer: {user.get('name', '')} ({user.get('email', '')})",
        f"Total: {currency_prefix} {order.get('totalAmount', 0)}",
        f"Payment: {order.get('paymentStatus', '')} ({order.get('paymentMethod', '')})",
    ]
    if payment_id:
        lines.append(f"Payment ID: {payment_id}")
    lines.extend([
        f"Status: {order.get('orderStatus', '')}",
        f"Shipping: {address.get('address', '')}, {address.get('city', '')}",
        f"Items: {items}",
    ])
    if order.get('trackingNumber'):
        lines.append(f"Tracking: {order['trackingNumber']}")
    return '\n'.join(lines)

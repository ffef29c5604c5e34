"""
Order Status Manager
====================

Keeps the admin's view of the order list and pushes status changes to the
storefront API. Every successful change is followed by a full refetch; a
failed change leaves the current list untouched until the next refetch.

No transition rules are applied: any order or payment status may follow
any other.
"""

from backoffice.core.api_client import APIError
from backoffice.core.logging_service import LoggingService
from .models import ORDER_STATUSES, PAYMENT_STATUSES, canonical_status

ORDER_UPDATE_FAILED = 'Failed to update order. Please try again.'
TRACKING_UPDATE_FAILED = 'Failed to update tracking number. Please try again.'

ALL = 'all'


class OrderUpdateError(Exception):
    """A status or tracking update did not go through"""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidStatusError(ValueError):
    """A submitted status is not part of the vocabulary"""


def _matches_status(value, wanted):
    if not wanted or wanted.lower() == ALL:
        return True
    return (value or '').lower() == wanted.lower()


def order_matches_search(order, search):
    """Case-insensitive substring match over order number, customer and item names"""
    if not search:
        return True
    needle = search.strip().lower()
    if not needle:
        return True

    user = order.get('user') or {}
    haystack = [
        order.get('orderNumber') or '',
        str(order.get('_id') or ''),
        user.get('name') or '',
        user.get('email') or '',
    ]
    haystack.extend(item.get('name') or '' for item in order.get('items') or [])

    return any(needle in str(value).lower() for value in haystack)


def filter_orders(orders, order_status=ALL, payment_status=ALL, search=''):
    """Orders passing the order-status filter, the payment-status filter and the search"""
    return [
        order for order in orders
        if _matches_status(order.get('orderStatus'), order_status)
        and _matches_status(order.get('paymentStatus'), payment_status)
        and order_matches_search(order, search)
    ]


def order_stats(orders):
    return {
        'total': len(orders),
        'processing': sum(1 for o in orders if _matches_status(o.get('orderStatus'), 'Processing')),
        'paid': sum(1 for o in orders if _matches_status(o.get('paymentStatus'), 'Paid')),
        'pending_payment': sum(1 for o in orders if _matches_status(o.get('paymentStatus'), 'Pending')),
    }


class OrderStatusManager:
    """Order list plus the three mutations an operator can make"""

    def __init__(self, api):
        self.api = api
        self.orders = []
        self.load_error = None

    def list_orders(self):
        """
        Fetch the full order collection.

        A failed read leaves the list empty and records the error; there is no retry.
        """
        try:
            self.orders = self.api.list_orders()
            self.load_error = None
        except APIError as e:
            LoggingService.error('orders', f"Error fetching orders: {e.message}",
                                 {'status_code': e.status_code})
            self.orders = []
            self.load_error = e.message
        return self.orders

    def find(self, order_id):
        for order in self.orders:
            if str(order.get('_id')) == str(order_id):
                return order
        return None

    def filtered(self, order_status=ALL, payment_status=ALL, search=''):
        return filter_orders(self.orders, order_status, payment_status, search)

    def stats(self):
        return order_stats(self.orders)

    def _update(self, order_id, fields, failure_message):
        try:
            self.api.update_order(order_id, fields)
        except APIError as e:
            LoggingService.log_error_with_traceback('orders', e, {
                'order_id': order_id,
                'fields': fields,
                'status_code': e.status_code
            })
            raise OrderUpdateError(failure_message, cause=e) from e

        field, value = next(iter(fields.items()))
        LoggingService.log_user_action('orders', f"Set {field} of order {order_id} to {value}")
        self.list_orders()

    def set_order_status(self, order_id, new_status):
        status = canonical_status(new_status, ORDER_STATUSES)
        if not status:
            raise InvalidStatusError(f"Invalid order status: {new_status}")
        self._update(order_id, {'orderStatus': status}, ORDER_UPDATE_FAILED)
        return status

    def set_payment_status(self, order_id, new_status):
        status = canonical_status(new_status, PAYMENT_STATUSES)
        if not status:
            raise InvalidStatusError(f"Invalid payment status: {new_status}")
        self._update(order_id, {'paymentStatus': status}, ORDER_UPDATE_FAILED)
        return status

    def set_tracking_number(self, order_id, value):
        """
        Attach a tracking number to an order.

        Empty or whitespace-only values are ignored: no request is made and
        any stored tracking number stays as it is. Numeric values are sent
        as strings. Returns True when an update was sent.
        """
        tracking_number = '' if value is None else str(value).strip()
        if not tracking_number:
            return False
        self._update(order_id, {'trackingNumber': tracking_number}, TRACKING_UPDATE_FAILED)
        return True

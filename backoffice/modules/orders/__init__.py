"""
Orders Admin Module
===================

Admin interface for order management.
Plugs into the admin dashboard module.

Provides:
- Order listing with status/payment filters and search
- Order status and payment status updates
- Tracking number entry
- Order detail summary
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders_admin',
    __name__,
    url_prefix='/admin/orders',
    template_folder='templates'
)

from . import routes

__all__ = ['orders_bp']

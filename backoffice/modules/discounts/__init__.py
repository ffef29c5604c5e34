"""
Discounts Admin Module
======================

Admin interface for promotional discount codes.

Provides:
- Discount code listing with expiry and usage
- Activate/deactivate toggle
- Deletion
"""

from flask import Blueprint

discounts_bp = Blueprint(
    'discounts_admin',
    __name__,
    url_prefix='/admin/discounts',
    template_folder='templates'
)

from . import routes

__all__ = ['discounts_bp']

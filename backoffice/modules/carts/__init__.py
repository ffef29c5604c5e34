"""
Carts Admin Module
==================

Read-only view of storefront carts that have not been converted to orders.
"""

from flask import Blueprint

carts_bp = Blueprint(
    'carts_admin',
    __name__,
    url_prefix='/admin/carts',
    template_folder='templates'
)

from . import routes

__all__ = ['carts_bp']

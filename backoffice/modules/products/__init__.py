"""
Products Admin Module
=====================

Admin listing of the product catalogue.

Provides:
- Product listing with price, stock and category
- Deletion
"""

from flask import Blueprint

products_bp = Blueprint(
    'products_admin',
    __name__,
    url_prefix='/admin/products',
    template_folder='templates'
)

from . import routes

__all__ = ['products_bp']

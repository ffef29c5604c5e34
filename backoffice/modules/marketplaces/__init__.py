"""
Marketplaces Admin Module
=========================

Third-party platforms the products are also sold on, shown on the
storefront's "also available at" section.

Provides:
- Platform listing, inactive ones included
- Activate/deactivate toggle
- Removal
"""

from flask import Blueprint

marketplaces_bp = Blueprint(
    'marketplaces_admin',
    __name__,
    url_prefix='/admin/marketplaces',
    template_folder='templates'
)

from . import routes

__all__ = ['marketplaces_bp']

"""
Banners Admin Module
====================

Admin interface for promotional banners.

Provides:
- Banner listing with position and status
- Activate/deactivate toggle
- Deletion
"""

from flask import Blueprint

banners_bp = Blueprint(
    'banners_admin',
    __name__,
    url_prefix='/admin/banners',
    template_folder='templates'
)

from . import routes

__all__ = ['banners_bp']

"""
Users Admin Module
==================

Admin interface for registered storefront users.

Provides:
- User listing and search by name or email
- Activate/deactivate toggle
"""

from flask import Blueprint

users_bp = Blueprint(
    'users_admin',
    __name__,
    url_prefix='/admin/users',
    template_folder='templates'
)

from . import routes

__all__ = ['users_bp']

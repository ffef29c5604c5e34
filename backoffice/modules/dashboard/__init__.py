"""
Dashboard Module
================

Admin dashboard interface for the backoffice.

Provides core admin functionality:
- Admin login/logout against the storefront API
- Unauthorized page for non-admin accounts
- Dashboard with collection counts
- Shared layout template the other modules extend

This is the foundation module that other admin features plug into.
"""

from flask import Blueprint

# Blueprint name is 'admin' so every module can redirect to 'admin.login'
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

from . import routes

__all__ = ['dashboard_bp']

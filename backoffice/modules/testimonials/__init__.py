"""
Testimonials Admin Module
=========================

Moderation of customer testimonials: approve/unapprove and delete.
"""

from flask import Blueprint

testimonials_bp = Blueprint(
    'testimonials_admin',
    __name__,
    url_prefix='/admin/testimonials',
    template_folder='templates'
)

from . import routes

__all__ = ['testimonials_bp']

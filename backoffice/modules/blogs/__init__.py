"""
Blogs Admin Module
==================

Admin listing of blog posts with deletion.
"""

from flask import Blueprint

blogs_bp = Blueprint(
    'blogs_admin',
    __name__,
    url_prefix='/admin/blogs',
    template_folder='templates'
)

from . import routes

__all__ = ['blogs_bp']

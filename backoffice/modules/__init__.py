"""
Backoffice Modules
==================

Collection of Flask blueprint modules for the storefront admin panel.
"""

__all__ = ['dashboard', 'orders', 'discounts', 'users', 'testimonials', 'carts',
           'products', 'blogs', 'banners', 'marketplaces']

"""
Backoffice - A Flask Admin Panel for a Storefront API
=====================================================

A modular admin back-office for an e-commerce storefront with:
- Order status, payment status and tracking management
- Discount codes, users, testimonials and carts screens
- Products, blogs, banners and marketplaces listings
- Dashboard with collection counts
- Admin login gated on the storefront API's admin role

Usage:
    from backoffice import Backoffice

    app = Flask(__name__)
    backoffice = Backoffice(app, {'features': {'carts': False}})
"""

import os
from importlib import import_module

__version__ = '0.1.0'
__author__ = 'Laurence Stephan'

from .core.config import Config, DEFAULT_KEYS
from .core.database import Database
from .core.api_client import get_image_url
from .core.auth import get_admin_user

# Feature modules in registration order: (name, import path, blueprint attribute)
MODULES = [
    ('dashboard', 'backoffice.modules.dashboard', 'dashboard_bp'),
    ('orders', 'backoffice.modules.orders', 'orders_bp'),
    ('discounts', 'backoffice.modules.discounts', 'discounts_bp'),
    ('users', 'backoffice.modules.users', 'users_bp'),
    ('testimonials', 'backoffice.modules.testimonials', 'testimonials_bp'),
    ('carts', 'backoffice.modules.carts', 'carts_bp'),
    ('products', 'backoffice.modules.products', 'products_bp'),
    ('blogs', 'backoffice.modules.blogs', 'blogs_bp'),
    ('banners', 'backoffice.modules.banners', 'banners_bp'),
    ('marketplaces', 'backoffice.modules.marketplaces', 'marketplaces_bp'),
]

# Sidebar entries: (module, label, endpoint)
NAVIGATION = [
    ('dashboard', 'Dashboard', 'admin.dashboard'),
    ('products', 'Products', 'products_admin.products_manager'),
    ('orders', 'Orders', 'orders_admin.orders_manager'),
    ('users', 'Users', 'users_admin.users_manager'),
    ('testimonials', 'Testimonials', 'testimonials_admin.testimonials_manager'),
    ('banners', 'Banners', 'banners_admin.banners_manager'),
    ('marketplaces', 'Marketplaces', 'marketplaces_admin.marketplaces_manager'),
    ('discounts', 'Discounts', 'discounts_admin.discounts_manager'),
    ('blogs', 'Blogs', 'blogs_admin.blogs_manager'),
    ('carts', 'Carts', 'carts_admin.carts_manager'),
]


class Backoffice:
    """Flask extension that registers the backoffice modules on an app"""

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config_defaults(app)
        self._setup_database_dir(app)

        for name, import_path, attr in MODULES:
            # Dashboard owns login, so it cannot be switched off
            if name != 'dashboard' and not self.feature_enabled(name):
                continue
            module = import_module(import_path)
            app.register_blueprint(getattr(module, attr))
            self._registered.append(name)

        app.add_template_filter(get_image_url, 'image_url')
        app.context_processor(self._template_context)

        app.extensions['backoffice'] = self

    def _apply_config_defaults(self, app):
        for key in DEFAULT_KEYS:
            if not app.config.get(key):
                app.config[key] = getattr(Config, key)

        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        if self._config.get('brand_name'):
            app.config['BRAND_NAME'] = self._config['brand_name']

    def _setup_database_dir(self, app):
        db_dir = app.config.get('DB_DIR')
        log_dir = os.path.dirname(app.config.get('LOG_DB') or '')
        for path in (db_dir, log_dir):
            if not path:
                continue
            try:
                Database.ensure_dir(path)
            except OSError as e:
                print(f"Could not create database directory {path}: {e}")

    def _template_context(self):
        from flask import current_app
        navigation = [
            {'label': label, 'endpoint': endpoint}
            for module, label, endpoint in NAVIGATION
            if module in self._registered
        ]
        return {
            'backoffice_config': dict(self._config),
            'brand_name': current_app.config.get('BRAND_NAME') or Config.BRAND_NAME,
            'admin_user': get_admin_user(),
            'navigation': navigation,
        }

    def feature_enabled(self, name):
        return self._config.get('features', {}).get(name, True)

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['Backoffice', '__version__']

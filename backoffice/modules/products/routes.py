"""
Products Admin Routes
=====================
"""

from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api, get_image_url
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.config import get_config_value
from backoffice.core.logging_service import LoggingService
from backoffice.modules.orders.models import format_amount
from . import products_bp


def summarize_product(product, currency_prefix='Rs.'):
    images = product.get('images') or []
    stock = product.get('stock') or 0
    return {
        'id': product.get('_id'),
        'name': product.get('name', ''),
        'code': product.get('code', ''),
        'price_display': format_amount(product.get('price'), currency_prefix),
        'stock': stock,
        'in_stock': stock > 0,
        'category': product.get('category', ''),
        'image': get_image_url(images[0]) if images else '',
    }


@products_bp.route('/')
@login_required
def products_manager():
    """Product catalogue page"""
    currency = get_config_value('CURRENCY_PREFIX', 'Rs.')
    try:
        products = get_api().list_collection('/products')
    except APIError as e:
        LoggingService.error('products', f"Error fetching products: {e.message}")
        flash('Could not load products from the storefront API.', 'error')
        products = []

    return render_template('products/products.html',
                           products=[summarize_product(p, currency) for p in products])


@products_bp.route('/api/product/<product_id>/delete', methods=['POST'])
@api_login_required
def api_delete_product(product_id):
    try:
        get_api().delete(f"/products/{product_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('products', e, {'product_id': product_id})
        return jsonify({'success': False, 'error': 'Failed to delete product. Please try again.'}), 502

    LoggingService.log_user_action('products', f"Deleted product {product_id}")
    return jsonify({'success': True})

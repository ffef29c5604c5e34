"""
Shared fixtures for the backoffice tests.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import copy
import os
import shutil
import tempfile

import pytest
from flask import Flask

from backoffice import Backoffice
from backoffice.core.api_client import APIError
from backoffice.core.config import Config


ORDERS = [
    {
        '_id': '6650a1f0c2b4e1a9d0000001',
        'orderNumber': 'MSK-1001',
        'user': {'name': 'Asha Verma', 'email': 'asha@example.com'},
        'items': [
            {'name': 'Oud Royale', 'size': '50ml', 'quantity': 1, 'price': 2499},
            {'name': 'Rose Attar', 'size': '10ml', 'quantity': 2, 'price': 799},
        ],
        'totalAmount': 4097,
        'orderStatus': 'Processing',
        'paymentStatus': 'Paid',
        'paymentMethod': 'Razorpay',
        'paymentDetails': {'razorpay_payment_id': 'pay_NkQ7sd81XyZabc12'},
        'shippingAddress': {'name': 'Asha Verma', 'address': '12 MG Road', 'city': 'Pune',
                            'state': 'MH', 'pincode': '411001', 'country': 'India', 'phone': '9999999999'},
        'createdAt': '2024-05-24T10:15:00.000Z',
        'updatedAt': '2024-05-24T10:15:00.000Z',
    },
    {
        '_id': '6650a1f0c2b4e1a9d0000002',
        'orderNumber': 'MSK-1002',
        'user': {'name': 'Rahul Mehta', 'email': 'rahul@example.com'},
        'items': [{'name': 'Sandal Musk', 'size': '100ml', 'quantity': 1, 'price': 1899}],
        'totalAmount': 1899,
        'orderStatus': 'Pending',
        'paymentStatus': 'Pending',
        'paymentMethod': 'COD',
        'shippingAddress': {'address': '4 Park Street', 'city': 'Kolkata'},
        'createdAt': '2024-05-25T08:00:00.000Z',
        'updatedAt': '2024-05-25T08:00:00.000Z',
    },
    {
        '_id': '6650a1f0c2b4e1a9d0000003',
        'orderNumber': '',
        'user': {'name': 'Meera Iyer', 'email': 'meera@example.com'},
        'items': [{'name': 'Amber Noir', 'quantity': 3, 'price': 1500}],
        'totalAmount': 4500,
        'orderStatus': 'Shipped',
        'paymentStatus': 'Paid',
        'paymentMethod': 'Razorpay',
        'trackingNumber': 'DLV123456',
        'createdAt': '2024-05-26T12:30:00.000Z',
        'updatedAt': '2024-05-27T09:00:00.000Z',
    },
]


class FakeStorefrontAPI:
    """In-memory stand-in for the storefront API client"""

    def __init__(self, orders=None, collections=None):
        self.orders = copy.deepcopy(ORDERS if orders is None else orders)
        self.collections = collections or {}
        self.calls = []
        self.fail_reads = False
        self.fail_writes = False
        self.failing_paths = set()

    def list_orders(self):
        self.calls.append(('GET', '/orders', None))
        if self.fail_reads:
            raise APIError('connection refused')
        return copy.deepcopy(self.orders)

    def update_order(self, order_id, fields):
        self.calls.append(('PUT', f'/orders/{order_id}', fields))
        if self.fail_writes:
            raise APIError('API returned 500', status_code=500)
        for order in self.orders:
            if order['_id'] == order_id:
                order.update(fields)
        return {'success': True}

    def list_collection(self, path, auth=False):
        self.calls.append(('GET', path, None))
        if self.fail_reads or path in self.failing_paths:
            raise APIError('connection refused')
        return copy.deepcopy(self.collections.get(path, []))

    def count_collection(self, path, auth=False):
        return len(self.list_collection(path, auth))

    def put(self, path, json):
        self.calls.append(('PUT', path, json))
        if self.fail_writes:
            raise APIError('API returned 500', status_code=500)
        return {'success': True}

    def delete(self, path):
        self.calls.append(('DELETE', path, None))
        if self.fail_writes:
            raise APIError('API returned 500', status_code=500)
        return {'success': True}

    def writes(self):
        return [call for call in self.calls if call[0] in ('PUT', 'DELETE')]


ROUTE_MODULES = [
    'backoffice.modules.dashboard.routes',
    'backoffice.modules.orders.routes',
    'backoffice.modules.discounts.routes',
    'backoffice.modules.users.routes',
    'backoffice.modules.testimonials.routes',
    'backoffice.modules.carts.routes',
    'backoffice.modules.products.routes',
    'backoffice.modules.blogs.routes',
    'backoffice.modules.banners.routes',
    'backoffice.modules.marketplaces.routes',
]


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="backoffice-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_log_db(tmp_db_dir, monkeypatch):
    """Keep log writes made outside an app context out of the working directory."""
    monkeypatch.setattr(Config, 'LOG_DB', os.path.join(tmp_db_dir, 'fallback_logs.db'))


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with every backoffice module registered."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["API_BASE_URL"] = "https://api.test/api"
    Backoffice(app, {'brand_name': 'Test Admin'})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Client whose session holds an admin token."""
    with client.session_transaction() as sess:
        sess['admin_token'] = 'tok-admin'
        sess['admin_user'] = {'id': 'u1', 'name': 'Admin', 'email': 'admin@example.com', 'role': 'admin'}
    return client


@pytest.fixture
def fake_api(monkeypatch):
    """Route every module's get_api() to one in-memory fake."""
    api = FakeStorefrontAPI()
    for module in ROUTE_MODULES:
        monkeypatch.setattr(f'{module}.get_api', lambda: api)
    return api

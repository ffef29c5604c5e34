"""
Order status manager tests: filtering, search, status mutations and the
JSON endpoints the orders page calls.
"""

import pytest

from backoffice.modules.orders.manager import (
    OrderStatusManager, OrderUpdateError, InvalidStatusError,
    filter_orders, order_matches_search, order_stats,
    ORDER_UPDATE_FAILED, TRACKING_UPDATE_FAILED,
)
from backoffice.modules.orders.models import (
    summarize_order, order_details_text, format_amount, canonical_status,
    ORDER_STATUSES, PAYMENT_STATUSES,
)
from conftest import FakeStorefrontAPI, ORDERS

FIRST_ID = '6650a1f0c2b4e1a9d0000001'
SECOND_ID = '6650a1f0c2b4e1a9d0000002'
THIRD_ID = '6650a1f0c2b4e1a9d0000003'


def ids(orders):
    return [o['_id'] for o in orders]


# ---------------------------------------------------------------------------
# Filtering and search
# ---------------------------------------------------------------------------

def test_filter_all_returns_everything():
    assert ids(filter_orders(ORDERS)) == [FIRST_ID, SECOND_ID, THIRD_ID]


def test_filter_is_conjunction_of_both_statuses():
    assert ids(filter_orders(ORDERS, payment_status='paid')) == [FIRST_ID, THIRD_ID]
    assert ids(filter_orders(ORDERS, order_status='shipped', payment_status='paid')) == [THIRD_ID]
    assert filter_orders(ORDERS, order_status='shipped', payment_status='pending') == []


def test_filter_combines_status_and_search():
    assert ids(filter_orders(ORDERS, payment_status='Paid', search='meera')) == [THIRD_ID]
    assert filter_orders(ORDERS, order_status='Pending', search='meera') == []


@pytest.mark.parametrize('term, expected', [
    ('msk-1002', [SECOND_ID]),
    ('ASHA', [FIRST_ID]),
    ('rahul@EXAMPLE', [SECOND_ID]),
    ('rose attar', [FIRST_ID]),
    ('noir', [THIRD_ID]),
    ('example.com', [FIRST_ID, SECOND_ID, THIRD_ID]),
    ('nobody', []),
])
def test_search_is_case_insensitive_substring(term, expected):
    assert ids(filter_orders(ORDERS, search=term)) == expected


def test_blank_search_matches():
    assert order_matches_search(ORDERS[0], '')
    assert order_matches_search(ORDERS[0], '   ')


def test_search_tolerates_missing_user_and_items():
    order = {'_id': 'abc', 'orderStatus': 'Pending', 'paymentStatus': 'Pending'}
    assert not order_matches_search(order, 'asha')
    assert order_matches_search(order, 'ABC')


def test_order_stats():
    assert order_stats(ORDERS) == {'total': 3, 'processing': 1, 'paid': 2, 'pending_payment': 1}


def test_order_stats_ignore_status_case():
    orders = [
        {'_id': 'a', 'orderStatus': 'processing', 'paymentStatus': 'paid'},
        {'_id': 'b', 'orderStatus': 'PROCESSING', 'paymentStatus': 'pending'},
    ]
    assert len(filter_orders(orders, order_status='Processing')) == 2
    assert order_stats(orders) == {'total': 2, 'processing': 2, 'paid': 1, 'pending_payment': 1}


# ---------------------------------------------------------------------------
# Manager mutations
# ---------------------------------------------------------------------------

def test_list_orders_failure_leaves_list_empty():
    api = FakeStorefrontAPI()
    api.fail_reads = True
    manager = OrderStatusManager(api)

    assert manager.list_orders() == []
    assert manager.load_error == 'connection refused'
    # No retry
    assert len([c for c in api.calls if c[1] == '/orders']) == 1


def test_set_order_status_sends_partial_update_and_refetches():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)
    manager.list_orders()

    assert manager.set_order_status(SECOND_ID, 'Shipped') == 'Shipped'

    assert api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'orderStatus': 'Shipped'})]
    assert manager.find(SECOND_ID)['orderStatus'] == 'Shipped'
    assert api.calls[-1] == ('GET', '/orders', None)


def test_set_payment_status_is_independent_of_order_status():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    manager.set_payment_status(SECOND_ID, 'Failed')

    assert api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'paymentStatus': 'Failed'})]
    order = manager.find(SECOND_ID)
    assert order['paymentStatus'] == 'Failed'
    assert order['orderStatus'] == 'Pending'


def test_any_status_may_follow_any_status():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    manager.set_order_status(THIRD_ID, 'Delivered')
    manager.set_order_status(THIRD_ID, 'Pending')

    assert manager.find(THIRD_ID)['orderStatus'] == 'Pending'


def test_status_values_are_matched_case_insensitively():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    assert manager.set_order_status(FIRST_ID, 'delivered') == 'Delivered'
    assert api.writes()[0][2] == {'orderStatus': 'Delivered'}


def test_unknown_status_is_rejected_without_a_request():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    with pytest.raises(InvalidStatusError):
        manager.set_order_status(FIRST_ID, 'Lost')
    with pytest.raises(InvalidStatusError):
        manager.set_payment_status(FIRST_ID, 'Refunded')

    assert api.writes() == []


def test_failed_update_keeps_stale_list_and_raises_static_message():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)
    manager.list_orders()
    api.fail_writes = True

    with pytest.raises(OrderUpdateError) as excinfo:
        manager.set_order_status(FIRST_ID, 'Cancelled')

    assert excinfo.value.message == ORDER_UPDATE_FAILED
    assert manager.find(FIRST_ID)['orderStatus'] == 'Processing'
    # No refetch after the failed write
    assert api.calls[-1][0] == 'PUT'


def test_tracking_number_issues_exactly_one_update():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    assert manager.set_tracking_number(SECOND_ID, 'BLUEDART-778') is True

    assert api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'trackingNumber': 'BLUEDART-778'})]
    assert manager.find(SECOND_ID)['trackingNumber'] == 'BLUEDART-778'


def test_numeric_tracking_number_is_sent_as_text():
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    assert manager.set_tracking_number(SECOND_ID, 778812345) is True
    assert api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'trackingNumber': '778812345'})]


@pytest.mark.parametrize('value', ['', '   ', None])
def test_empty_tracking_number_issues_no_update(value):
    api = FakeStorefrontAPI()
    manager = OrderStatusManager(api)

    assert manager.set_tracking_number(THIRD_ID, value) is False
    assert api.calls == []


def test_tracking_failure_message():
    api = FakeStorefrontAPI()
    api.fail_writes = True
    manager = OrderStatusManager(api)

    with pytest.raises(OrderUpdateError) as excinfo:
        manager.set_tracking_number(SECOND_ID, 'X1')
    assert excinfo.value.message == TRACKING_UPDATE_FAILED


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def test_summarize_order_row():
    row = summarize_order(ORDERS[0])
    assert row['order_number'] == 'MSK-1001'
    assert row['amount_display'] == 'Rs. 4,097'
    assert row['item_count'] == 2
    assert row['items_summary'] == 'Oud Royale, Rose Attar'
    assert row['payment_reference'] == 'XyZabc12'
    assert row['order_status_color'] == 'bg-blue-100 text-blue-800'
    assert row['payment_status_color'] == 'bg-green-100 text-green-800'
    assert row['created_at'] == '2024-05-24'


def test_summarize_order_falls_back_to_id_tail():
    row = summarize_order(ORDERS[2])
    assert row['order_number'] == 'd0000003'
    assert row['tracking_number'] == 'DLV123456'


def test_items_summary_ellipsis():
    order = dict(ORDERS[1], items=[{'name': n} for n in ('A', 'B', 'C')])
    assert summarize_order(order)['items_summary'] == 'A, B...'


def test_order_details_text():
    text = order_details_text(ORDERS[0])
    assert 'Order #MSK-1001' in text
    assert 'Customer: Asha Verma (asha@example.com)' in text
    assert 'Payment ID: pay_NkQ7sd81XyZabc12' in text
    assert 'Shipping: 12 MG Road, Pune' in text
    assert 'Items: Oud Royale x1, Rose Attar x2' in text


def test_format_amount():
    assert format_amount(1234567) == 'Rs. 1,234,567'
    assert format_amount(None) == 'Rs. 0'
    assert format_amount(99.5, '₹') == '₹ 99.50'


def test_canonical_status():
    assert canonical_status(' shipped ', ORDER_STATUSES) == 'Shipped'
    assert canonical_status('PAID', PAYMENT_STATUSES) == 'Paid'
    assert canonical_status('Shipped', PAYMENT_STATUSES) is None
    assert canonical_status(None, ORDER_STATUSES) is None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

def test_orders_page_requires_login(client):
    response = client.get('/admin/orders/', follow_redirects=False)
    assert response.status_code == 302
    assert '/admin/login' in response.headers['Location']


def test_orders_api_requires_login(client):
    response = client.post(f'/admin/orders/api/order/{FIRST_ID}/status', json={'orderStatus': 'Shipped'})
    assert response.status_code == 401


def test_orders_page_renders_filtered_rows(admin_client, fake_api):
    response = admin_client.get('/admin/orders/?status=processing&payment=paid')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert '#MSK-1001' in html
    assert '#MSK-1002' not in html
    assert 'Rs. 4,097' in html


def test_orders_page_with_failed_read_shows_empty_table(admin_client, fake_api):
    fake_api.fail_reads = True
    response = admin_client.get('/admin/orders/')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'No orders found' in html
    assert 'Could not load orders' in html


def test_api_orders_search(admin_client, fake_api):
    data = admin_client.get('/admin/orders/api/orders?q=SANDAL').get_json()

    assert data['success'] is True
    assert [o['order_number'] for o in data['orders']] == ['MSK-1002']
    assert data['stats']['total'] == 3


def test_api_set_order_status_then_list_reflects_it(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/status',
                                 json={'orderStatus': 'Delivered'})
    assert response.status_code == 200
    assert response.get_json()['updated'] is True

    data = admin_client.get('/admin/orders/api/orders?status=delivered').get_json()
    assert [o['id'] for o in data['orders']] == [SECOND_ID]


def test_api_set_payment_status(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/payment-status',
                                 json={'paymentStatus': 'Paid'})
    assert response.status_code == 200
    assert fake_api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'paymentStatus': 'Paid'})]


def test_api_status_failure_returns_alert_message(admin_client, fake_api):
    fake_api.fail_writes = True
    response = admin_client.post(f'/admin/orders/api/order/{FIRST_ID}/status',
                                 json={'orderStatus': 'Cancelled'})

    assert response.status_code == 502
    assert response.get_json() == {'success': False, 'error': ORDER_UPDATE_FAILED}


def test_api_invalid_status_is_bad_request(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{FIRST_ID}/status',
                                 json={'orderStatus': 'Teleported'})
    assert response.status_code == 400
    assert fake_api.writes() == []


def test_api_missing_status_field(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{FIRST_ID}/payment-status', json={})
    assert response.status_code == 400


def test_api_tracking_empty_is_ignored(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/tracking',
                                 json={'trackingNumber': ''})

    assert response.status_code == 200
    data = response.get_json()
    assert data['updated'] is False
    assert len(data['orders']) == 3
    assert fake_api.writes() == []


def test_api_tracking_accepts_numeric_value(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/tracking',
                                 json={'trackingNumber': 778812345})

    assert response.status_code == 200
    assert response.get_json()['updated'] is True
    assert fake_api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'trackingNumber': '778812345'})]


@pytest.mark.parametrize('endpoint, expected_status', [
    ('status', 400),
    ('payment-status', 400),
    ('tracking', 200),
])
def test_api_non_object_body_is_treated_as_empty(admin_client, fake_api, endpoint, expected_status):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/{endpoint}', json=['x'])

    assert response.status_code == expected_status
    assert fake_api.writes() == []


def test_api_tracking_sets_value(admin_client, fake_api):
    response = admin_client.post(f'/admin/orders/api/order/{SECOND_ID}/tracking',
                                 json={'trackingNumber': 'DTDC-5521'})

    assert response.get_json()['updated'] is True
    assert fake_api.writes() == [('PUT', f'/orders/{SECOND_ID}', {'trackingNumber': 'DTDC-5521'})]


def test_api_order_details(admin_client, fake_api):
    data = admin_client.get(f'/admin/orders/api/order/{FIRST_ID}').get_json()
    assert data['success'] is True
    assert data['order']['orderNumber'] == 'MSK-1001'
    assert 'Order #MSK-1001' in data['details']

    missing = admin_client.get('/admin/orders/api/order/does-not-exist')
    assert missing.status_code == 404

"""
Test utilities: record factories and a stub HTTP session for the inventory API
"""
import json
import random
import string
import uuid
from unittest import mock

from django.conf import settings
from django.core.cache import cache

from inventory_dashboard.core.api_client import InventoryApiClient

TIMESTAMP = '2024-05-01T12:00:00Z'


class TestDataFactory:
    """Factory class for building API records"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def new_id():
        return str(uuid.uuid4())

    @staticmethod
    def serial_number(serial, item_id=None, item_type='computer'):
        return {
            'id': TestDataFactory.new_id(),
            'item_type': item_type,
            'item_id': item_id,
            'serial_number': serial,
            'status': 'active',
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
        }

    @staticmethod
    def computer(serials=None, **overrides):
        """Computer record; ``serials`` is a list of serial strings"""
        record_id = overrides.pop('id', None) or TestDataFactory.new_id()
        record = {
            'id': record_id,
            'make': 'Dell',
            'model': 'OptiPlex 7090',
            'quantity': 1,
            'office': 'Office 1',
            'status': 'active',
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
            'serial_numbers': [
                TestDataFactory.serial_number(serial, record_id) for serial in serials or []
            ],
        }
        record.update(overrides)
        return record

    @staticmethod
    def peripheral(serials=None, **overrides):
        record_id = overrides.pop('id', None) or TestDataFactory.new_id()
        record = {
            'id': record_id,
            'item_name': 'Keyboard',
            'make': 'Logitech',
            'model': 'K120',
            'quantity': 1,
            'office': 'Office 1',
            'status': 'active',
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
            'serial_numbers': [
                TestDataFactory.serial_number(serial, record_id, 'peripheral') for serial in serials or []
            ],
        }
        record.update(overrides)
        return record

    @staticmethod
    def printer_item(**overrides):
        record = {
            'id': TestDataFactory.new_id(),
            'item_type': 'Toner Cartridge',
            'make': 'HP',
            'model': '26A',
            'quantity': 4,
            'office': 'Office 1',
            'status': 'active',
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
        }
        record.update(overrides)
        return record

    @staticmethod
    def restock_request(**overrides):
        record = {
            'id': TestDataFactory.new_id(),
            'item_category': 'computers',
            'item_description': 'Desktops for new hires',
            'make_id': None,
            'model_id': None,
            'make_name': None,
            'model_name': None,
            'quantity_requested': 2,
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'pending',
            'requested_by': 'Facilities',
            'notes': None,
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
        }
        record.update(overrides)
        return record

    @staticmethod
    def make(name=None, category='computer', **overrides):
        record = {
            'id': TestDataFactory.new_id(),
            'name': name or f'Make_{TestDataFactory.random_string(6)}',
            'category': category,
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
        }
        record.update(overrides)
        return record

    @staticmethod
    def model(make, name=None, **overrides):
        """Catalog model belonging to ``make`` (a make record)"""
        record = {
            'id': TestDataFactory.new_id(),
            'name': name or f'Model_{TestDataFactory.random_string(6)}',
            'make_id': make['id'],
            'make_name': make['name'],
            'category': make['category'],
            'created_at': TIMESTAMP,
            'updated_at': TIMESTAMP,
        }
        record.update(overrides)
        return record

    @staticmethod
    def audit_log(table_name='computers', action='INSERT', **overrides):
        record = {
            'id': TestDataFactory.new_id(),
            'table_name': table_name,
            'record_id': TestDataFactory.new_id(),
            'action': action,
            'old_values': None,
            'new_values': {'make': 'Dell'},
            'office': 'Office 1',
            'timestamp': TIMESTAMP,
        }
        record.update(overrides)
        return record

    @staticmethod
    def counts(**per_office):
        """counts(**{'Office 1': (2, 5)}) -> [{'office', 'total', 'total_quantity'}]"""
        return [
            {'office': office, 'total': total, 'total_quantity': quantity}
            for office, (total, quantity) in per_office.items()
        ]


class FakeResponse:
    """Just enough of requests.Response for the API client"""

    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        if content is None:
            content = json.dumps(body).encode() if body is not None else b''
        self.content = content

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.content)


class StubApiSession:
    """
    Stands in for requests.Session.

    Responses are registered per (method, endpoint); every request is
    recorded in ``calls``. Unregistered endpoints answer with a 404 error
    envelope.
    """

    def __init__(self):
        self.headers = {}
        self.routes = {}
        self.calls = []

    def add(self, method, endpoint, data=None, status_code=200, body=None, content=None, exception=None):
        if body is None and content is None and exception is None and status_code < 400:
            body = {'success': True, 'data': data}
        self.routes[(method, endpoint)] = (status_code, body, content, exception)

    def request(self, method, url, params=None, json=None, timeout=None):
        base_url = settings.INVENTORY_API_BASE_URL.rstrip('/')
        endpoint = url[len(base_url):] if url.startswith(base_url) else url
        self.calls.append({'method': method, 'endpoint': endpoint, 'params': params or {}, 'json': json})

        route = self.routes.get((method, endpoint))
        if route is None:
            return FakeResponse(404, {'success': False, 'error': f'Route {endpoint} not found'})
        status_code, body, content, exception = route
        if exception is not None:
            raise exception
        return FakeResponse(status_code, body, content)

    def calls_to(self, method, endpoint):
        return [call for call in self.calls if call['method'] == method and call['endpoint'] == endpoint]

    def last_call(self, method, endpoint):
        calls = self.calls_to(method, endpoint)
        return calls[-1] if calls else None


class StubApiMixin:
    """
    Routes every InventoryApiClient created during a test through
    ``self.api`` (a StubApiSession) and starts each test with an empty cache.
    """

    def setUp(self):
        super().setUp()
        cache.clear()
        self.api = StubApiSession()
        patcher = mock.patch.object(InventoryApiClient, 'session_class', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)

    def select_office(self, office):
        return self.client.post('/office/', {'office': office, 'next': '/'})

    def messages_from(self, response):
        return [str(message) for message in response.context['messages']]

"""
Tests for the API client, office selection, caching helpers and the home dashboard
"""
import requests
from django.core.cache import cache
from django.test import TestCase, SimpleTestCase, override_settings
from rest_framework import status

from inventory_dashboard.core.api_client import InventoryApiClient, build_query_params
from inventory_dashboard.core.cache_utils import (
    get_cached_makes, invalidate_catalog_cache, get_cached_report, cache_report
)
from inventory_dashboard.core.exceptions import ApiError, ApiConnectionError
from inventory_dashboard.core.offices import SELECTED_OFFICE_SESSION_KEY
from inventory_dashboard.core.serializers import parse_records, InventoryCountSerializer, UNEXPECTED_RESPONSE
from inventory_dashboard.core.templatetags.inventory_tags import status_badge, pluralize_serials
from inventory_dashboard.core.test_utils import TestDataFactory, StubApiSession, StubApiMixin
from inventory_dashboard.core.utils import office_totals, positive_int


class ApiClientTests(SimpleTestCase):
    """Envelope handling of InventoryApiClient"""

    def setUp(self):
        self.api = StubApiSession()
        self.client_under_test = InventoryApiClient(session=self.api)

    def test_returns_envelope_data(self):
        computer = TestDataFactory.computer()
        self.api.add('GET', '/computers', [computer])
        self.assertEqual(self.client_under_test.list_computers(), [computer])

    def test_sets_json_headers(self):
        self.assertEqual(self.api.headers['Content-Type'], 'application/json')

    def test_unset_params_are_dropped(self):
        self.api.add('GET', '/computers', [])
        self.client_under_test.list_computers({'office': 'Office 2', 'search': '', 'status': None, 'limit': 0})
        call = self.api.last_call('GET', '/computers')
        self.assertEqual(call['params'], {'office': 'Office 2', 'limit': 0})

    def test_build_query_params_handles_none(self):
        self.assertEqual(build_query_params(None), {})

    def test_http_error_uses_body_error(self):
        self.api.add('POST', '/computers', status_code=400, body={
            'success': False,
            'error': 'Validation failed',
            'details': [{'field': 'make', 'message': 'Make is required', 'type': 'any.required'}],
        })
        with self.assertRaises(ApiError) as ctx:
            self.client_under_test.create_computer({})
        self.assertEqual(str(ctx.exception), 'Validation failed')
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.field_errors(), {'make': 'Make is required'})

    def test_http_error_without_message(self):
        self.api.add('GET', '/computers', status_code=500, body={})
        with self.assertRaises(ApiError) as ctx:
            self.client_under_test.list_computers()
        self.assertEqual(str(ctx.exception), 'HTTP error! status: 500')

    def test_http_error_without_body(self):
        self.api.add('DELETE', '/computers/abc', status_code=502, content=b'')
        with self.assertRaises(ApiError) as ctx:
            self.client_under_test.delete_computer('abc')
        self.assertEqual(str(ctx.exception), 'HTTP error! status: 502')

    def test_success_false_defaults_error(self):
        self.api.add('GET', '/makes', body={'success': False})
        with self.assertRaises(ApiError) as ctx:
            self.client_under_test.list_makes()
        self.assertEqual(str(ctx.exception), 'An error occurred')

    def test_connection_failure_is_network_error(self):
        self.api.add('GET', '/health', exception=requests.ConnectionError('Connection refused'))
        with self.assertRaises(ApiConnectionError) as ctx:
            self.client_under_test.health()
        self.assertEqual(str(ctx.exception), 'Network error')
        self.assertIn('Connection refused', ctx.exception.message)

    def test_invalid_json_is_network_error(self):
        self.api.add('GET', '/health', content=b'<html>Bad Gateway</html>')
        with self.assertRaises(ApiConnectionError):
            self.client_under_test.health()

    def test_empty_success_body_returns_none(self):
        self.api.add('DELETE', '/makes/1', status_code=204, content=b'')
        self.assertIsNone(self.client_under_test.delete_make('1'))

    def test_path_segments_are_quoted(self):
        self.api.add('GET', '/printer-items/by-type/Ink%20Cartridge', [])
        self.client_under_test.printer_items_by_type('Ink Cartridge', 'Office 3')
        call = self.api.last_call('GET', '/printer-items/by-type/Ink%20Cartridge')
        self.assertEqual(call['params'], {'office': 'Office 3'})

    def test_audit_log_for_record_endpoint(self):
        self.api.add('GET', '/audit-log/computers/42', [])
        self.assertEqual(self.client_under_test.audit_log_for_record('computers', 42), [])


class ParseRecordsTests(SimpleTestCase):

    def test_none_is_empty_list(self):
        self.assertEqual(parse_records(InventoryCountSerializer, None), [])

    def test_unexpected_shape_raises_api_error(self):
        with self.assertRaises(ApiError) as ctx:
            parse_records(InventoryCountSerializer, [{'office': 'Office 9', 'total': 'x'}])
        self.assertEqual(str(ctx.exception), UNEXPECTED_RESPONSE)


class UtilsTests(SimpleTestCase):

    def test_office_totals_fill_missing_offices_with_zero(self):
        rows = office_totals(
            ['Office 1', 'Office 2'],
            TestDataFactory.counts(**{'Office 1': (2, 5)}),
            TestDataFactory.counts(**{'Office 1': (1, 10), 'Office 2': (3, 3)}),
            [],
        )
        self.assertEqual(rows[0]['total_items'], 3)
        self.assertEqual(rows[0]['total_quantity'], 15)
        self.assertEqual(rows[1]['computers'], {'total': 0, 'total_quantity': 0})
        self.assertEqual(rows[1]['total_items'], 3)

    def test_positive_int(self):
        self.assertEqual(positive_int('7'), 7)
        self.assertIsNone(positive_int('0'))
        self.assertIsNone(positive_int('-3'))
        self.assertIsNone(positive_int('abc'))
        self.assertIsNone(positive_int(None))

    def test_badges(self):
        self.assertEqual(status_badge('maintenance'), 'status-badge status-maintenance')
        self.assertEqual(pluralize_serials(1), '1 serial number')
        self.assertEqual(pluralize_serials(3), '3 serial numbers')


class CacheUtilsTests(TestCase):

    def setUp(self):
        cache.clear()
        self.api = StubApiSession()
        self.api_client = InventoryApiClient(session=self.api)

    def test_makes_are_cached_until_invalidated(self):
        self.api.add('GET', '/makes', [TestDataFactory.make('Dell')])
        get_cached_makes(self.api_client, 'computer')
        get_cached_makes(self.api_client, 'computer')
        self.assertEqual(len(self.api.calls_to('GET', '/makes')), 1)

        invalidate_catalog_cache()
        get_cached_makes(self.api_client, 'computer')
        self.assertEqual(len(self.api.calls_to('GET', '/makes')), 2)

    def test_makes_cache_is_per_category(self):
        self.api.add('GET', '/makes', [])
        get_cached_makes(self.api_client, 'computer')
        get_cached_makes(self.api_client, 'printer')
        self.assertEqual(len(self.api.calls_to('GET', '/makes')), 2)

    def test_report_cache_keyed_by_office(self):
        _, key = get_cached_report('inventory', 'Office 1')
        cache_report(key, {'totals': []})
        self.assertEqual(get_cached_report('inventory', 'Office 1')[0], {'totals': []})
        self.assertIsNone(get_cached_report('inventory', 'Office 2')[0])


class OfficeSelectionTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        for endpoint in ('/computers/counts', '/peripherals/counts', '/printer-items/counts',
                         '/audit-log/recent', '/restock-requests'):
            self.api.add('GET', endpoint, [])

    def test_select_office_is_remembered(self):
        response = self.select_office('Office 2')
        self.assertRedirects(response, '/', fetch_redirect_response=False)
        self.assertEqual(self.client.session[SELECTED_OFFICE_SESSION_KEY], 'Office 2')

        response = self.client.get('/')
        self.assertEqual(response.context['selected_office'], 'Office 2')
        call = self.api.last_call('GET', '/restock-requests')
        self.assertEqual(call['params']['office'], 'Office 2')

    def test_empty_selection_means_all_offices(self):
        self.select_office('Office 2')
        self.select_office('')
        self.assertNotIn(SELECTED_OFFICE_SESSION_KEY, self.client.session)
        response = self.client.get('/')
        self.assertIsNone(response.context['selected_office'])
        self.assertEqual(len(response.context['office_rows']), 3)

    def test_unknown_office_is_ignored(self):
        self.select_office('Office 2')
        response = self.client.post('/office/', {'office': 'Mars', 'next': '/'}, follow=True)
        self.assertIsNone(response.context['selected_office'])
        self.assertIn('Unknown office; showing all offices', self.messages_from(response))

    def test_external_next_is_not_followed(self):
        response = self.client.post('/office/', {'office': 'Office 1', 'next': 'https://evil.example.com/'})
        self.assertRedirects(response, '/', fetch_redirect_response=False)

    def test_select_office_requires_post(self):
        response = self.client.get('/office/')
        self.assertEqual(response.status_code, 405)


class HomeViewTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.api.add('GET', '/computers/counts', TestDataFactory.counts(**{'Office 1': (2, 4)}))
        self.api.add('GET', '/peripherals/counts', TestDataFactory.counts(**{'Office 1': (1, 10)}))
        self.api.add('GET', '/printer-items/counts', [])
        self.api.add('GET', '/audit-log/recent', [TestDataFactory.audit_log()])
        self.api.add('GET', '/restock-requests', [TestDataFactory.restock_request(item_description='Toner for floor 2')])

    def test_home_renders_all_panels(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        office_1 = response.context['office_rows'][0]
        self.assertEqual(office_1['total_items'], 3)
        self.assertEqual(office_1['total_quantity'], 14)
        self.assertContains(response, 'Toner for floor 2')

        call = self.api.last_call('GET', '/restock-requests')
        self.assertEqual(call['params'], {'status': 'pending', 'limit': 5})
        self.assertEqual(self.api.last_call('GET', '/audit-log/recent')['params'], {'limit': 5})

    def test_counts_failure_does_not_hide_other_panels(self):
        self.api.add('GET', '/computers/counts', status_code=500, body={'success': False, 'error': 'Database unavailable'})
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['counts_error'], 'Database unavailable')
        self.assertContains(response, 'Toner for floor 2')

    def test_selected_office_narrows_counts(self):
        self.select_office('Office 3')
        response = self.client.get('/')
        rows = response.context['office_rows']
        self.assertEqual([row['office'] for row in rows], ['Office 3'])
        self.assertEqual(rows[0]['total_items'], 0)


class HealthViewTests(StubApiMixin, TestCase):

    def test_health_ok(self):
        self.api.add('GET', '/health', {'message': 'OK', 'database': 'connected', 'timestamp': '2024-05-01T12:00:00Z'})
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['api'], 'ok')

    def test_health_api_down(self):
        self.api.add('GET', '/health', exception=requests.Timeout('timed out'))
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.json(), {'dashboard': 'ok', 'api': 'unavailable', 'error': 'Network error'})


@override_settings(INVENTORY_API_BASE_URL='http://inventory.internal/api/')
class ApiClientSettingsTests(SimpleTestCase):

    def test_base_url_from_settings(self):
        api = StubApiSession()
        client = InventoryApiClient(session=api)
        self.assertEqual(client.base_url, 'http://inventory.internal/api')

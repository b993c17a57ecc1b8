"""
Tests for the reports tabs, the activity log and per-record history
"""
from django.test import TestCase, SimpleTestCase

from inventory_dashboard.core.test_utils import TestDataFactory, StubApiMixin
from inventory_dashboard.reports.views import changed_fields


INVENTORY_SUMMARY = {
    'computers': [{'office': 'Office 1', 'total_items': 2, 'total_quantity': 7}],
    'peripherals': [],
    'printer_items': [{'office': 'Office 1', 'total_items': 1, 'total_quantity': 12}],
    'totals': [{'category': 'computers', 'office': 'Office 1', 'total_items': 2, 'total_quantity': 7}],
}


class ReportsTests(StubApiMixin, TestCase):
    """Test report tabs"""

    def setUp(self):
        super().setUp()
        self.api.add('GET', '/reports/inventory-summary', INVENTORY_SUMMARY)

    def test_default_report_is_inventory(self):
        response = self.client.get('/reports/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['report'].key, 'inventory')
        self.assertContains(response, '7 items')
        self.assertContains(response, '12 items')

    def test_unknown_report_falls_back_with_warning(self):
        response = self.client.get('/reports/', {'report': 'payroll'})
        self.assertEqual(response.context['report'].key, 'inventory')
        self.assertIn('Unknown report "payroll"; showing Inventory Summary.', self.messages_from(response))

    def test_report_is_cached_per_office(self):
        self.client.get('/reports/')
        self.client.get('/reports/')
        self.assertEqual(len(self.api.calls_to('GET', '/reports/inventory-summary')), 1)

        self.select_office('Office 2')
        self.client.get('/reports/')
        calls = self.api.calls_to('GET', '/reports/inventory-summary')
        self.assertEqual(len(calls), 2)
        self.assertEqual(calls[-1]['params'], {'office': 'Office 2'})

    def test_refresh_bypasses_cache(self):
        self.client.get('/reports/')
        self.client.get('/reports/', {'report': 'inventory', 'refresh': '1'})
        self.assertEqual(len(self.api.calls_to('GET', '/reports/inventory-summary')), 2)

    def test_office_comparison_ignores_selected_office(self):
        self.api.add('GET', '/reports/office-comparison', {
            'inventory_comparison': [{'office': 'Office 3', 'category': 'computers', 'total_items': 4, 'total_quantity': 9}],
            'restock_comparison': [{'office': 'Office 3', 'status': 'pending', 'count': 2}],
        })
        self.select_office('Office 1')
        response = self.client.get('/reports/', {'report': 'office-comparison'})
        self.assertContains(response, 'Office 3')
        self.assertEqual(self.api.last_call('GET', '/reports/office-comparison')['params'], {})

    def test_restock_report(self):
        self.api.add('GET', '/reports/restock-requests', {
            'statistics': [{'status': 'pending', 'priority': 'high', 'office': 'Office 1', 'count': 2, 'total_quantity': 8}],
            'recent_requests': [TestDataFactory.restock_request(item_description='Docking stations')],
        })
        response = self.client.get('/reports/', {'report': 'restock'})
        self.assertContains(response, 'Docking stations')

    def test_activity_report(self):
        self.api.add('GET', '/reports/activity', {
            'recent_activity': [{'table_name': 'computers', 'action': 'UPDATE', 'office': None, 'count': 3, 'timestamp': '2024-05-01T12:00:00Z'}],
            'summary': [{'table_name': 'peripherals', 'action': 'INSERT', 'office': None, 'count': 5, 'last_activity': '2024-05-02T08:30:00Z'}],
        })
        response = self.client.get('/reports/', {'report': 'activity'})
        self.assertContains(response, 'All Offices')
        self.assertContains(response, 'May 2, 2024')

    def test_report_error(self):
        self.api.add('GET', '/reports/inventory-summary', status_code=500, body={'success': False, 'error': 'Report failed'})
        response = self.client.get('/reports/')
        self.assertEqual(response.context['error'], 'Report failed')


class ActivityLogTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.api.add('GET', '/audit-log', [TestDataFactory.audit_log(record_id='c1')])
        self.api.add('GET', '/audit-log/action-counts', [{'action': 'INSERT', 'count': 4}])
        self.api.add('GET', '/audit-log/table-activity', [{'table_name': 'computers', 'activity_count': 4}])

    def test_activity_log(self):
        self.select_office('Office 1')
        response = self.client.get('/activity/', {'table_name': 'computers', 'days': '7', 'limit': 'ten'})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '/activity/computers/c1/')
        self.assertEqual(self.api.last_call('GET', '/audit-log')['params'], {
            'office': 'Office 1',
            'table_name': 'computers',
            'days': 7,
        })
        self.assertEqual(self.api.last_call('GET', '/audit-log/action-counts')['params'], {'office': 'Office 1', 'days': 7})

    def test_invalid_days_ignored(self):
        self.client.get('/activity/', {'days': '-1'})
        self.assertNotIn('days', self.api.last_call('GET', '/audit-log')['params'])

    def test_valid_limit_passed_through(self):
        self.client.get('/activity/', {'limit': '10'})
        self.assertEqual(self.api.last_call('GET', '/audit-log')['params'], {'limit': 10})

    def test_summary_failure_keeps_log(self):
        self.api.add('GET', '/audit-log/action-counts', status_code=500, body={'success': False, 'error': 'Stats down'})
        response = self.client.get('/activity/')
        self.assertEqual(response.context['summary_error'], 'Stats down')
        self.assertEqual(len(response.context['entries']), 1)

    def test_record_history(self):
        self.api.add('GET', '/audit-log/computers/c1', [
            TestDataFactory.audit_log(
                record_id='c1', action='UPDATE',
                old_values={'status': 'active', 'quantity': 1},
                new_values={'status': 'maintenance', 'quantity': 1},
            ),
        ])
        response = self.client.get('/activity/computers/c1/')
        self.assertEqual(response.status_code, 200)
        changes = response.context['history'][0]['changes']
        self.assertEqual(changes, [{'field': 'status', 'old': 'active', 'new': 'maintenance'}])
        self.assertContains(response, 'maintenance')

    def test_record_history_error(self):
        response = self.client.get('/activity/computers/missing/')
        self.assertIn('not found', response.context['error'])


class ChangedFieldsTests(SimpleTestCase):

    def test_insert_lists_new_values(self):
        self.assertEqual(
            changed_fields(None, {'make': 'Dell'}),
            [{'field': 'make', 'old': None, 'new': 'Dell'}],
        )

    def test_delete_lists_old_values(self):
        self.assertEqual(
            changed_fields({'make': 'Dell'}, None),
            [{'field': 'make', 'old': 'Dell', 'new': None}],
        )

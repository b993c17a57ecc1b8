"""
Tests for restock requests: filters, summary counts, the request form and CRUD views
"""
from django.test import TestCase, SimpleTestCase

from inventory_dashboard.core.choices import MAX_QUANTITY
from inventory_dashboard.core.test_utils import TestDataFactory, StubApiMixin
from inventory_dashboard.restock.forms import RestockRequestForm, RestockFilterForm, make_category_for


class RestockFormTests(SimpleTestCase):

    def setUp(self):
        self.dell = TestDataFactory.make('Dell', id='m1')
        self.optiplex = TestDataFactory.model(self.dell, 'OptiPlex', id='md1')

    def test_defaults(self):
        form = RestockRequestForm(makes=[], models=[])
        self.assertEqual(form['item_category'].value(), 'computers')
        self.assertEqual(form['quantity_requested'].value(), 1)
        self.assertEqual(form['office'].value(), 'Office 1')
        self.assertEqual(form['priority'].value(), 'normal')
        self.assertEqual(form['status'].value(), 'pending')

    def test_payload_omits_blank_optional_fields(self):
        form = RestockRequestForm({
            'item_category': 'peripherals',
            'item_description': ' Wireless mice ',
            'make_id': '',
            'model_id': '',
            'quantity_requested': '6',
            'office': 'Office 2',
            'priority': 'high',
            'status': 'pending',
            'requested_by': '   ',
            'notes': '',
        }, makes=[], models=[])
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_payload(), {
            'item_category': 'peripherals',
            'item_description': 'Wireless mice',
            'quantity_requested': 6,
            'office': 'Office 2',
            'priority': 'high',
            'status': 'pending',
        })

    def test_payload_includes_make_and_model_ids(self):
        form = RestockRequestForm({
            'item_category': 'computers',
            'item_description': 'Desktops',
            'make_id': 'm1',
            'model_id': 'md1',
            'quantity_requested': '2',
            'office': 'Office 1',
            'priority': 'urgent',
            'status': 'approved',
            'requested_by': 'IT',
        }, makes=[self.dell], models=[self.optiplex])
        self.assertTrue(form.is_valid(), form.errors)
        payload = form.to_payload()
        self.assertEqual(payload['make_id'], 'm1')
        self.assertEqual(payload['model_id'], 'md1')
        self.assertEqual(payload['requested_by'], 'IT')

    def test_model_of_other_make_rejected(self):
        hp = TestDataFactory.make('HP', id='m2')
        form = RestockRequestForm({
            'item_category': 'computers',
            'item_description': 'Desktops',
            'make_id': 'm2',
            'model_id': 'md1',
            'quantity_requested': '1',
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'pending',
        }, makes=[self.dell, hp], models=[self.optiplex])
        self.assertFalse(form.is_valid())
        self.assertIn('model_id', form.errors)

    def test_quantity_must_be_positive(self):
        form = RestockRequestForm({
            'item_category': 'computers',
            'item_description': 'Desktops',
            'quantity_requested': '0',
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'pending',
        }, makes=[], models=[])
        self.assertFalse(form.is_valid())
        self.assertIn('quantity_requested', form.errors)

    def test_quantity_above_limit_rejected(self):
        form = RestockRequestForm({
            'item_category': 'computers',
            'item_description': 'Desktops',
            'quantity_requested': str(MAX_QUANTITY + 1),
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'pending',
        }, makes=[], models=[])
        self.assertFalse(form.is_valid())
        self.assertIn('quantity_requested', form.errors)

    def test_category_maps_to_catalog_category(self):
        self.assertEqual(make_category_for('computers'), 'computer')
        self.assertEqual(make_category_for('peripherals'), 'peripheral')
        self.assertEqual(make_category_for('printer_items'), 'printer')
        self.assertEqual(make_category_for('spaceships'), 'computer')

    def test_edit_keeps_existing_make_name(self):
        record = TestDataFactory.restock_request(make_id='gone', make_name='Compaq')
        form = RestockRequestForm(initial=RestockRequestForm.initial_from_record(record), makes=[], models=[])
        self.assertIn(('gone', 'Compaq'), form.fields['make_id'].choices)

    def test_filter_form_drops_invalid_values(self):
        form = RestockFilterForm({'status': 'approved', 'priority': 'whenever', 'item_category': ''})
        self.assertEqual(form.active_filters(), {'status': 'approved'})


class RestockViewTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.api.add('GET', '/restock-requests/status-counts', [
            {'status': 'pending', 'count': 3},
            {'status': 'received', 'count': 1},
        ])
        self.api.add('GET', '/restock-requests/pending-priority', [{'priority': 'urgent', 'count': 2}])
        self.api.add('GET', '/makes', [])
        self.api.add('GET', '/models', [])

    def test_list_with_filters_and_counts(self):
        self.api.add('GET', '/restock-requests', [TestDataFactory.restock_request(item_description='Paper reams')])
        self.select_office('Office 2')
        response = self.client.get('/restock-requests/', {'status': 'pending', 'priority': 'bogus'})
        self.assertContains(response, 'Paper reams')
        self.assertContains(response, 'Clear filters')

        call = self.api.last_call('GET', '/restock-requests')
        self.assertEqual(call['params'], {'status': 'pending', 'office': 'Office 2'})
        self.assertEqual(self.api.last_call('GET', '/restock-requests/status-counts')['params'], {'office': 'Office 2'})

        status_counts = {row['value']: row['count'] for row in response.context['status_counts']}
        self.assertEqual(status_counts, {'pending': 3, 'approved': 0, 'ordered': 0, 'received': 1, 'cancelled': 0})
        priority_counts = {row['value']: row['count'] for row in response.context['priority_counts']}
        self.assertEqual(priority_counts['urgent'], 2)
        self.assertEqual(priority_counts['low'], 0)

    def test_list_without_filters(self):
        self.api.add('GET', '/restock-requests', [])
        response = self.client.get('/restock-requests/')
        self.assertContains(response, 'No restock requests found.')
        self.assertFalse(response.context['has_filters'])

    def test_list_error(self):
        self.api.add('GET', '/restock-requests', status_code=500, body={'success': False, 'error': 'Boom'})
        response = self.client.get('/restock-requests/')
        self.assertEqual(response.context['error'], 'Boom')

    def test_create(self):
        self.api.add('GET', '/restock-requests', [])
        self.api.add('POST', '/restock-requests', TestDataFactory.restock_request())
        response = self.client.post('/restock-requests/new/', {
            'item_category': 'printer_items',
            'item_description': 'Toner',
            'quantity_requested': '3',
            'office': 'Office 3',
            'priority': 'normal',
            'status': 'pending',
        }, follow=True)
        self.assertRedirects(response, '/restock-requests/')
        self.assertIn('Restock request created successfully.', self.messages_from(response))
        self.assertEqual(self.api.last_call('GET', '/makes')['params'], {'category': 'printer'})
        payload = self.api.last_call('POST', '/restock-requests')['json']
        self.assertEqual(payload['item_category'], 'printer_items')
        self.assertNotIn('make_id', payload)

    def test_edit(self):
        record = TestDataFactory.restock_request(id='r1', status='pending')
        self.api.add('GET', '/restock-requests/r1', record)
        self.api.add('PUT', '/restock-requests/r1', record)
        response = self.client.get('/restock-requests/r1/edit/')
        self.assertEqual(response.context['form']['item_description'].value(), record['item_description'])

        response = self.client.post('/restock-requests/r1/edit/', {
            'item_category': 'computers',
            'item_description': record['item_description'],
            'quantity_requested': '2',
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'ordered',
        })
        self.assertRedirects(response, '/restock-requests/', fetch_redirect_response=False)
        self.assertEqual(self.api.last_call('PUT', '/restock-requests/r1')['json']['status'], 'ordered')

    def test_delete(self):
        self.api.add('GET', '/restock-requests', [])
        self.api.add('DELETE', '/restock-requests/r1', None)
        response = self.client.post('/restock-requests/r1/delete/', follow=True)
        self.assertIn('Restock request deleted successfully.', self.messages_from(response))

    def test_create_api_validation_error_marks_field(self):
        self.api.add('POST', '/restock-requests', status_code=400, body={
            'success': False,
            'error': 'Validation failed',
            'details': [{'field': 'item_description', 'message': 'Description is too vague'}],
        })
        response = self.client.post('/restock-requests/new/', {
            'item_category': 'computers',
            'item_description': 'Stuff',
            'quantity_requested': '1',
            'office': 'Office 1',
            'priority': 'normal',
            'status': 'pending',
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['error'], 'Validation failed')
        self.assertEqual(response.context['form'].errors['item_description'], ['Description is too vague'])

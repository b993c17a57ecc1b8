"""
Tests for make/model administration and the dropdown lookup endpoints
"""
from django.test import TestCase
from rest_framework import status

from inventory_dashboard.core.test_utils import TestDataFactory, StubApiMixin


class CatalogAdminTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.dell = TestDataFactory.make('Dell', id='m1')
        self.api.add('GET', '/makes', [self.dell])
        self.api.add('GET', '/models', [TestDataFactory.model(self.dell, 'Latitude 5420', id='md1')])

    def test_admin_defaults_to_computers(self):
        response = self.client.get('/admin/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['category'], 'computer')
        self.assertContains(response, 'Latitude 5420')
        self.assertContains(response, 'Are you sure you want to delete &quot;Dell&quot;?')
        self.assertEqual(self.api.last_call('GET', '/makes')['params'], {'category': 'computer'})

    def test_unknown_tab_falls_back(self):
        response = self.client.get('/admin/', {'tab': 'toasters'})
        self.assertEqual(response.context['tab'], 'computers')

    def test_printer_tab(self):
        self.client.get('/admin/', {'tab': 'printers'})
        self.assertEqual(self.api.last_call('GET', '/makes')['params'], {'category': 'printer'})

    def test_empty_catalog_messages(self):
        self.api.add('GET', '/makes', [])
        self.api.add('GET', '/models', [])
        response = self.client.get('/admin/', {'tab': 'peripherals'})
        self.assertContains(response, 'No makes found. Add one to get started.')
        self.assertContains(response, 'No models found. Add one to get started.')
        self.assertContains(response, 'You need to add at least one make before you can add models.')

    def test_create_make_invalidates_cache(self):
        self.client.get('/admin/')
        self.client.get('/admin/')
        self.assertEqual(len(self.api.calls_to('GET', '/makes')), 1)

        self.api.add('POST', '/makes', TestDataFactory.make('Lenovo'))
        response = self.client.post('/admin/makes/new/', {'name': ' Lenovo ', 'category': 'computer'})
        self.assertRedirects(response, '/admin/?tab=computers', fetch_redirect_response=False)
        self.assertEqual(self.api.last_call('POST', '/makes')['json'], {'name': 'Lenovo', 'category': 'computer'})

        self.client.get('/admin/')
        self.assertEqual(len(self.api.calls_to('GET', '/makes')), 2)

    def test_create_make_requires_name(self):
        response = self.client.post('/admin/makes/new/', {'name': '', 'category': 'computer'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('name', response.context['form'].errors)
        self.assertEqual(self.api.calls_to('POST', '/makes'), [])

    def test_create_make_api_error(self):
        self.api.add('POST', '/makes', status_code=409, body={'success': False, 'error': 'Make already exists'})
        response = self.client.post('/admin/makes/new/', {'name': 'Dell', 'category': 'computer'})
        self.assertEqual(response.context['error'], 'Make already exists')

    def test_edit_make(self):
        self.api.add('GET', '/makes/m1', self.dell)
        self.api.add('PUT', '/makes/m1', self.dell)
        response = self.client.get('/admin/makes/m1/edit/')
        self.assertEqual(response.context['form']['name'].value(), 'Dell')

        response = self.client.post('/admin/makes/m1/edit/', {'name': 'Dell Technologies', 'category': 'computer'})
        self.assertRedirects(response, '/admin/?tab=computers', fetch_redirect_response=False)
        self.assertEqual(self.api.last_call('PUT', '/makes/m1')['json']['name'], 'Dell Technologies')

    def test_delete_make_returns_to_tab(self):
        self.api.add('DELETE', '/makes/m9', None)
        response = self.client.post('/admin/makes/m9/delete/', {'category': 'printer'})
        self.assertRedirects(response, '/admin/?tab=printers', fetch_redirect_response=False)

    def test_delete_make_in_use(self):
        self.api.add('DELETE', '/makes/m1', status_code=400, body={'success': False, 'error': 'Make is in use'})
        response = self.client.post('/admin/makes/m1/delete/', {'category': 'computer'}, follow=True)
        self.assertIn('Make is in use', self.messages_from(response))

    def test_create_model(self):
        self.api.add('POST', '/models', TestDataFactory.model(self.dell, 'XPS 13'))
        response = self.client.post('/admin/models/new/', {'make_id': 'm1', 'name': 'XPS 13', 'category': 'computer'})
        self.assertRedirects(response, '/admin/?tab=computers', fetch_redirect_response=False)
        self.assertEqual(
            self.api.last_call('POST', '/models')['json'],
            {'name': 'XPS 13', 'make_id': 'm1', 'category': 'computer'},
        )

    def test_create_model_requires_make(self):
        response = self.client.post('/admin/models/new/', {'make_id': '', 'name': 'XPS 13', 'category': 'computer'})
        self.assertIn('make_id', response.context['form'].errors)

    def test_create_model_without_makes(self):
        self.api.add('GET', '/makes', [])
        response = self.client.post('/admin/models/new/', {'make_id': 'm1', 'name': 'XPS', 'category': 'computer'}, follow=True)
        self.assertIn('You need to add at least one make before you can add models.', self.messages_from(response))
        self.assertEqual(self.api.calls_to('POST', '/models'), [])

    def test_delete_model(self):
        self.api.add('DELETE', '/models/md1', None)
        response = self.client.post('/admin/models/md1/delete/', {'category': 'computer'}, follow=True)
        self.assertIn('Model deleted.', self.messages_from(response))


    def assert_models_reloaded_after(self, mutate):
        self.client.get('/admin/')
        self.client.get('/admin/')
        self.assertEqual(len(self.api.calls_to('GET', '/models')), 1)
        mutate()
        self.client.get('/admin/')
        self.assertEqual(len(self.api.calls_to('GET', '/models')), 2)

    def test_edit_model(self):
        latitude = TestDataFactory.model(self.dell, 'Latitude 5420', id='md1')
        self.api.add('GET', '/models/md1', latitude)
        self.api.add('PUT', '/models/md1', latitude)
        response = self.client.get('/admin/models/md1/edit/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['form']['name'].value(), 'Latitude 5420')
        self.assertEqual(response.context['form']['make_id'].value(), 'm1')

        response = self.client.post('/admin/models/md1/edit/', {'make_id': 'm1', 'name': 'Latitude 5430', 'category': 'computer'})
        self.assertRedirects(response, '/admin/?tab=computers', fetch_redirect_response=False)
        self.assertEqual(
            self.api.last_call('PUT', '/models/md1')['json'],
            {'name': 'Latitude 5430', 'make_id': 'm1', 'category': 'computer'},
        )

    def test_edit_missing_model_redirects(self):
        self.api.add('GET', '/models/gone', status_code=404, body={'success': False, 'error': 'Model not found'})
        response = self.client.get('/admin/models/gone/edit/', follow=True)
        self.assertRedirects(response, '/admin/')
        self.assertIn('Model not found', self.messages_from(response))

    def test_create_model_invalidates_cache(self):
        self.api.add('POST', '/models', TestDataFactory.model(self.dell, 'XPS 13'))
        self.assert_models_reloaded_after(lambda: self.client.post(
            '/admin/models/new/', {'make_id': 'm1', 'name': 'XPS 13', 'category': 'computer'},
        ))

    def test_update_model_invalidates_cache(self):
        latitude = TestDataFactory.model(self.dell, 'Latitude 5420', id='md1')
        self.api.add('GET', '/models/md1', latitude)
        self.api.add('PUT', '/models/md1', latitude)
        self.assert_models_reloaded_after(lambda: self.client.post(
            '/admin/models/md1/edit/', {'make_id': 'm1', 'name': 'Latitude 5430', 'category': 'computer'},
        ))

    def test_delete_model_invalidates_cache(self):
        self.api.add('DELETE', '/models/md1', None)
        self.assert_models_reloaded_after(lambda: self.client.post(
            '/admin/models/md1/delete/', {'category': 'computer'},
        ))


class LookupTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.dell = TestDataFactory.make('Dell', id='m1')
        self.api.add('GET', '/makes', [self.dell, TestDataFactory.make('HP', id='m2')])
        self.api.add('GET', '/models', [TestDataFactory.model(self.dell, 'OptiPlex', id='md1')])

    def test_make_lookup(self):
        response = self.client.get('/catalog/lookups/makes/', {'category': 'computer'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {'results': [{'id': 'm1', 'name': 'Dell'}, {'id': 'm2', 'name': 'HP'}]})

    def test_invalid_category(self):
        response = self.client.get('/catalog/lookups/makes/', {'category': 'boats'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.json())

    def test_model_lookup_by_make_id(self):
        response = self.client.get('/catalog/lookups/models/', {'category': 'computer', 'make_id': 'm1'})
        self.assertEqual(response.json()['results'][0]['name'], 'OptiPlex')
        self.assertEqual(self.api.last_call('GET', '/models')['params'], {'category': 'computer', 'make_id': 'm1'})

    def test_model_lookup_by_make_name(self):
        self.client.get('/catalog/lookups/models/', {'category': 'computer', 'make': 'Dell'})
        self.assertEqual(self.api.last_call('GET', '/models')['params'], {'category': 'computer', 'make_id': 'm1'})

    def test_model_lookup_unknown_make_name(self):
        response = self.client.get('/catalog/lookups/models/', {'category': 'computer', 'make': 'Acme'})
        self.assertEqual(response.json(), {'results': []})
        self.assertEqual(self.api.calls_to('GET', '/models'), [])

    def test_api_failure_is_bad_gateway(self):
        self.api.add('GET', '/makes', status_code=500, body={'success': False, 'error': 'Database unavailable'})
        response = self.client.get('/catalog/lookups/makes/', {'category': 'printer'})
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.json(), {'error': 'Database unavailable'})

"""
Tests for the inventory screens: serial-number bookkeeping, item forms and views
"""
from django.http import QueryDict
from django.test import TestCase, SimpleTestCase

from inventory_dashboard.core.choices import MAX_QUANTITY
from inventory_dashboard.core.test_utils import TestDataFactory, StubApiMixin
from inventory_dashboard.inventory.forms import (
    ComputerForm, PeripheralForm, PrinterItemForm,
    resize_serial_numbers, find_duplicate_serials, parse_quantity,
)


def form_data(**fields):
    """QueryDict like a browser POST; list values become repeated keys"""
    data = QueryDict(mutable=True)
    for name, value in fields.items():
        if isinstance(value, list):
            data.setlist(name, value)
        else:
            data[name] = value
    return data


class SerialNumberTests(SimpleTestCase):

    def test_resize_pads_with_blanks(self):
        self.assertEqual(resize_serial_numbers(['A1'], 3), ['A1', '', ''])

    def test_resize_truncates(self):
        self.assertEqual(resize_serial_numbers(['A1', 'A2', 'A3'], 2), ['A1', 'A2'])

    def test_resize_empty(self):
        self.assertEqual(resize_serial_numbers(None, 2), ['', ''])

    def test_duplicates_listed_per_extra_occurrence(self):
        self.assertEqual(find_duplicate_serials(['a', 'b', 'a', 'c', 'a', 'b']), ['a', 'a', 'b'])
        self.assertEqual(find_duplicate_serials(['a', 'b']), [])

    def test_parse_quantity(self):
        self.assertEqual(parse_quantity('4'), 4)
        self.assertEqual(parse_quantity(''), 1)
        self.assertEqual(parse_quantity('0'), 1)
        self.assertEqual(parse_quantity('-2'), 1)
        self.assertEqual(parse_quantity('abc'), 1)
        self.assertEqual(parse_quantity('20000000'), MAX_QUANTITY)


class ComputerFormTests(SimpleTestCase):

    def setUp(self):
        self.dell = TestDataFactory.make('Dell')
        self.hp = TestDataFactory.make('HP')
        self.makes = [self.dell, self.hp]
        self.models = [
            TestDataFactory.model(self.dell, 'OptiPlex 7090'),
            TestDataFactory.model(self.hp, 'EliteDesk 800'),
        ]

    def build(self, data=None, initial=None):
        return ComputerForm(data, initial=initial, makes=self.makes, models=self.models)

    def test_payload_drops_blank_serials(self):
        form = self.build(form_data(
            make='Dell', model='OptiPlex 7090', quantity='3',
            serial_numbers=[' SN1 ', '', 'SN2'], office='Office 2', status='active',
        ))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_payload(), {
            'make': 'Dell',
            'model': 'OptiPlex 7090',
            'quantity': 3,
            'office': 'Office 2',
            'status': 'active',
            'serial_numbers': ['SN1', 'SN2'],
        })

    def test_duplicate_serials_rejected(self):
        form = self.build(form_data(
            make='Dell', model='OptiPlex 7090', quantity='3',
            serial_numbers=['SN1', 'SN2', 'SN1'], office='Office 1', status='active',
        ))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['serial_numbers'], ['Duplicate serial numbers found: SN1'])

    def test_serials_beyond_quantity_are_dropped(self):
        form = self.build(form_data(
            make='Dell', model='OptiPlex 7090', quantity='1',
            serial_numbers=['SN1', 'SN2'], office='Office 1', status='active',
        ))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['serial_numbers'], ['SN1'])

    def test_make_and_model_required(self):
        form = self.build(form_data(quantity='1', office='Office 1', status='active'))
        self.assertFalse(form.is_valid())
        self.assertIn('make', form.errors)
        self.assertIn('model', form.errors)

    def test_model_must_belong_to_make(self):
        form = self.build(form_data(
            make='Dell', model='EliteDesk 800', quantity='1', office='Office 1', status='active',
        ))
        self.assertFalse(form.is_valid())
        self.assertIn('model', form.errors)

    def test_quantity_must_be_positive(self):
        form = self.build(form_data(
            make='Dell', model='OptiPlex 7090', quantity='0', office='Office 1', status='active',
        ))
        self.assertFalse(form.is_valid())
        self.assertIn('quantity', form.errors)

    def test_new_form_has_one_serial_slot_per_item(self):
        form = self.build()
        self.assertEqual(form.serial_number_slots, [''])
        self.assertEqual(form['quantity'].value(), 1)
        self.assertEqual(form['office'].value(), 'Office 1')
        self.assertEqual(form['status'].value(), 'active')

    def test_edit_form_pads_existing_serials(self):
        record = TestDataFactory.computer(serials=['SN1'], quantity=3)
        form = self.build(initial=ComputerForm.initial_from_record(record))
        self.assertEqual(form.serial_number_slots, ['SN1', '', ''])

    def test_bound_form_slots_follow_submitted_quantity(self):
        form = self.build(form_data(quantity='2', serial_numbers=['SN1', 'SN2', 'SN3']))
        self.assertEqual(form.serial_number_slots, ['SN1', 'SN2'])

    def test_quantity_above_limit_rejected(self):
        form = self.build(form_data(make='', quantity='20000000', office='Office 1', status='active'))
        self.assertFalse(form.is_valid())
        self.assertIn('quantity', form.errors)
        self.assertEqual(len(form.serial_number_slots), MAX_QUANTITY)

    def test_retired_make_stays_selectable(self):
        record = TestDataFactory.computer(make='Compaq', model='Presario')
        form = self.build(initial=ComputerForm.initial_from_record(record))
        self.assertIn(('Compaq', 'Compaq'), form.fields['make'].choices)
        self.assertIn(('Presario', 'Presario'), form.fields['model'].choices)

    def test_model_choices_follow_selected_make(self):
        form = self.build(form_data(make='HP'))
        model_names = [value for value, _ in form.fields['model'].choices if value]
        self.assertEqual(model_names, ['EliteDesk 800'])


class OptionalMakeModelFormTests(SimpleTestCase):

    def test_peripheral_make_model_optional(self):
        form = PeripheralForm(form_data(
            item_name='  Mouse ', quantity='2', serial_numbers=['', ''], office='Office 3', status='maintenance',
        ), makes=[], models=[])
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_payload(), {
            'item_name': 'Mouse',
            'quantity': 2,
            'office': 'Office 3',
            'status': 'maintenance',
            'serial_numbers': [],
        })

    def test_printer_item_requires_type(self):
        form = PrinterItemForm(form_data(quantity='1', office='Office 1', status='active'), makes=[], models=[])
        self.assertFalse(form.is_valid())
        self.assertIn('item_type', form.errors)

    def test_printer_item_payload(self):
        hp = TestDataFactory.make('HP', category='printer')
        form = PrinterItemForm(form_data(
            item_type='Toner Cartridge', make='HP', quantity='5', office='Office 2', status='active',
        ), makes=[hp], models=[])
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_payload(), {
            'item_type': 'Toner Cartridge',
            'make': 'HP',
            'quantity': 5,
            'office': 'Office 2',
            'status': 'active',
        })


class ComputerViewTests(StubApiMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.dell = TestDataFactory.make('Dell')
        self.api.add('GET', '/makes', [self.dell])
        self.api.add('GET', '/models', [TestDataFactory.model(self.dell, 'OptiPlex 7090')])

    def test_list_renders_serials(self):
        self.api.add('GET', '/computers', [
            TestDataFactory.computer(serials=['SN-100', ''], quantity=2),
        ])
        response = self.client.get('/computers/')
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'SN-100')
        self.assertContains(response, '(Empty 2)')
        self.assertContains(response, '2 serial numbers')

    def test_list_passes_search_and_office(self):
        self.api.add('GET', '/computers', [])
        self.select_office('Office 2')
        response = self.client.get('/computers/', {'search': ' dell '})
        self.assertContains(response, 'No computers found.')
        call = self.api.last_call('GET', '/computers')
        self.assertEqual(call['params'], {'office': 'Office 2', 'search': 'dell'})

    def test_list_error_shows_retry(self):
        self.api.add('GET', '/computers', status_code=500, body={'success': False, 'error': 'Database unavailable'})
        response = self.client.get('/computers/')
        self.assertEqual(response.context['error'], 'Database unavailable')
        self.assertContains(response, 'Retry')

    def test_create_posts_payload(self):
        self.api.add('GET', '/computers', [])
        self.api.add('POST', '/computers', TestDataFactory.computer(), status_code=201)
        response = self.client.post('/computers/new/', dict(
            make='Dell', model='OptiPlex 7090', quantity='2',
            serial_numbers=['SN1', ''], office='Office 1', status='active',
        ), follow=True)
        self.assertRedirects(response, '/computers/')
        self.assertIn('Computer added successfully.', self.messages_from(response))
        payload = self.api.last_call('POST', '/computers')['json']
        self.assertEqual(payload['serial_numbers'], ['SN1'])
        self.assertEqual(payload['quantity'], 2)

    def test_create_api_error_rerenders_form(self):
        self.api.add('POST', '/computers', status_code=400, body={'success': False, 'error': 'Validation failed'})
        response = self.client.post('/computers/new/', dict(
            make='Dell', model='OptiPlex 7090', quantity='1', office='Office 1', status='active',
        ))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['error'], 'Validation failed')

    def test_invalid_form_not_sent(self):
        response = self.client.post('/computers/new/', dict(
            make='Dell', model='OptiPlex 7090', quantity='2',
            serial_numbers=['SN1', 'SN1'], office='Office 1', status='active',
        ))
        self.assertContains(response, 'Duplicate serial numbers found: SN1')
        self.assertEqual(self.api.calls_to('POST', '/computers'), [])

    def test_catalog_failure_still_renders_form(self):
        self.api.add('GET', '/makes', status_code=503, body={'success': False, 'error': 'Catalog offline'})
        response = self.client.get('/computers/new/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['catalog_error'], 'Catalog offline')

    def test_edit_prefills_and_updates(self):
        record = TestDataFactory.computer(id='c1', serials=['SN1'], quantity=2)
        self.api.add('GET', '/computers/c1', record)
        self.api.add('PUT', '/computers/c1', record)

        response = self.client.get('/computers/c1/edit/')
        self.assertEqual(response.context['form'].serial_number_slots, ['SN1', ''])

        response = self.client.post('/computers/c1/edit/', dict(
            make='Dell', model='OptiPlex 7090', quantity='2',
            serial_numbers=['SN1', 'SN2'], office='Office 1', status='maintenance',
        ))
        self.assertRedirects(response, '/computers/', fetch_redirect_response=False)
        payload = self.api.last_call('PUT', '/computers/c1')['json']
        self.assertEqual(payload['status'], 'maintenance')
        self.assertEqual(payload['serial_numbers'], ['SN1', 'SN2'])

    def test_edit_missing_record_redirects_with_error(self):
        self.api.add('GET', '/computers', [])
        self.api.add('GET', '/computers/nope', status_code=404, body={'success': False, 'error': 'Computer not found'})
        response = self.client.get('/computers/nope/edit/', follow=True)
        self.assertRedirects(response, '/computers/')
        self.assertIn('Computer not found', self.messages_from(response))

    def test_delete(self):
        self.api.add('DELETE', '/computers/c1', None)
        self.api.add('GET', '/computers', [])
        response = self.client.post('/computers/c1/delete/', follow=True)
        self.assertIn('Computer deleted successfully.', self.messages_from(response))

    def test_delete_failure_flashes_error(self):
        self.api.add('DELETE', '/computers/c1', status_code=500, body={'success': False, 'error': 'Cannot delete'})
        self.api.add('GET', '/computers', [])
        response = self.client.post('/computers/c1/delete/', follow=True)
        self.assertIn('Cannot delete', self.messages_from(response))

    def test_delete_requires_post(self):
        response = self.client.get('/computers/c1/delete/')
        self.assertEqual(response.status_code, 405)


class PeripheralAndPrinterViewTests(StubApiMixin, TestCase):

    def test_peripheral_list(self):
        self.api.add('GET', '/peripherals', [TestDataFactory.peripheral(item_name='Monitor')])
        response = self.client.get('/peripherals/')
        self.assertContains(response, 'Monitor')
        self.assertContains(response, 'Search by name, make, or model...')

    def test_printer_items_by_type(self):
        self.api.add('GET', '/printer-items/by-type/Toner%20Cartridge', [TestDataFactory.printer_item()])
        self.select_office('Office 1')
        response = self.client.get('/printer-items/', {'item_type': 'Toner Cartridge'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['items']), 1)
        call = self.api.last_call('GET', '/printer-items/by-type/Toner%20Cartridge')
        self.assertEqual(call['params'], {'office': 'Office 1'})
        self.assertEqual(self.api.calls_to('GET', '/printer-items'), [])

    def test_printer_item_create_omits_blank_make(self):
        self.api.add('GET', '/makes', [])
        self.api.add('GET', '/models', [])
        self.api.add('POST', '/printer-items', TestDataFactory.printer_item())
        self.client.post('/printer-items/new/', dict(
            item_type='Paper', make='', model='', quantity='10', office='Office 1', status='active',
        ))
        payload = self.api.last_call('POST', '/printer-items')['json']
        self.assertEqual(payload, {'item_type': 'Paper', 'quantity': 10, 'office': 'Office 1', 'status': 'active'})

from django import forms

from inventory_dashboard.core.choices import (
    OFFICE_CHOICES, DEFAULT_OFFICE, ITEM_STATUS_CHOICES, PRINTER_ITEM_TYPES, MAX_QUANTITY
)
from inventory_dashboard.core.forms import MakeModelFormMixin


def parse_quantity(value, default=1):
    """Quantity typed so far, capped at MAX_QUANTITY; anything unusable counts as one item"""
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return default
    if quantity < 1:
        return default
    return min(quantity, MAX_QUANTITY)


def resize_serial_numbers(serial_numbers, quantity):
    """
    One serial slot per item.

    Raising the quantity appends empty slots, lowering it drops the trailing
    ones; slots that remain keep their values.
    """
    serial_numbers = list(serial_numbers or [])
    if len(serial_numbers) >= quantity:
        return serial_numbers[:quantity]
    return serial_numbers + [''] * (quantity - len(serial_numbers))


def find_duplicate_serials(serial_numbers):
    """Values entered more than once, in order of their repeated occurrence"""
    seen = set()
    duplicates = []
    for serial in serial_numbers:
        if serial in seen:
            duplicates.append(serial)
        seen.add(serial)
    return duplicates


class SerialNumbersWidget(forms.Widget):
    """Repeated ``serial_numbers`` inputs; the template renders one per slot"""

    def value_from_datadict(self, data, files, name):
        if hasattr(data, 'getlist'):
            return data.getlist(name)
        value = data.get(name)
        if value is None:
            return []
        return value if isinstance(value, (list, tuple)) else [value]

    def value_omitted_from_data(self, data, files, name):
        return False


class SerialNumbersField(forms.Field):
    widget = SerialNumbersWidget

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(*args, **kwargs)

    def to_python(self, value):
        if not value:
            return []
        return [str(serial).strip() for serial in value]


class InventoryItemForm(forms.Form):
    """Fields every inventory item shares"""
    quantity = forms.IntegerField(min_value=1, max_value=MAX_QUANTITY, initial=1)
    office = forms.ChoiceField(choices=OFFICE_CHOICES, initial=DEFAULT_OFFICE)
    status = forms.ChoiceField(choices=ITEM_STATUS_CHOICES, initial='active')

    payload_fields = ('quantity', 'office', 'status')

    def to_payload(self):
        return {name: self.cleaned_data[name] for name in self.payload_fields}


class SerialNumbersFormMixin:
    """Serial slots that follow the quantity field"""

    def clean_serial_numbers(self):
        serial_numbers = self.cleaned_data.get('serial_numbers') or []
        quantity = parse_quantity(self.data.get(self.add_prefix('quantity')))
        serial_numbers = [serial for serial in resize_serial_numbers(serial_numbers, quantity) if serial]

        duplicates = find_duplicate_serials(serial_numbers)
        if duplicates:
            raise forms.ValidationError(
                f"Duplicate serial numbers found: {', '.join(duplicates)}",
                code='duplicate_serials',
            )
        return serial_numbers

    @property
    def serial_number_slots(self):
        if self.is_bound:
            values = SerialNumbersWidget().value_from_datadict(self.data, None, self.add_prefix('serial_numbers'))
            quantity = parse_quantity(self.data.get(self.add_prefix('quantity')))
        else:
            values = self.initial.get('serial_numbers') or []
            quantity = parse_quantity(self.initial.get('quantity', 1))
        return resize_serial_numbers(values, quantity)


def record_serial_numbers(record):
    return [entry.get('serial_number') or '' for entry in record.get('serial_numbers') or []]


class ComputerForm(SerialNumbersFormMixin, MakeModelFormMixin, InventoryItemForm):
    make_model_required = True

    make = forms.ChoiceField(choices=())
    model = forms.ChoiceField(choices=())
    serial_numbers = SerialNumbersField()

    field_order = ['make', 'model', 'quantity', 'serial_numbers', 'office', 'status']

    def __init__(self, *args, makes=None, models=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.setup_make_model(makes, models)

    @classmethod
    def initial_from_record(cls, record):
        return {
            'make': record.get('make') or '',
            'model': record.get('model') or '',
            'quantity': record.get('quantity'),
            'office': record.get('office'),
            'status': record.get('status'),
            'serial_numbers': record_serial_numbers(record),
        }

    def to_payload(self):
        payload = super().to_payload()
        payload.update(self.make_model_payload())
        payload['serial_numbers'] = self.cleaned_data['serial_numbers']
        return payload


class PeripheralForm(SerialNumbersFormMixin, MakeModelFormMixin, InventoryItemForm):
    item_name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={'placeholder': 'e.g., Keyboard, Mouse, Monitor'}),
    )
    make = forms.ChoiceField(choices=())
    model = forms.ChoiceField(choices=())
    serial_numbers = SerialNumbersField()

    field_order = ['item_name', 'make', 'model', 'quantity', 'serial_numbers', 'office', 'status']

    def __init__(self, *args, makes=None, models=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.setup_make_model(makes, models)

    @classmethod
    def initial_from_record(cls, record):
        return {
            'item_name': record.get('item_name') or '',
            'make': record.get('make') or '',
            'model': record.get('model') or '',
            'quantity': record.get('quantity'),
            'office': record.get('office'),
            'status': record.get('status'),
            'serial_numbers': record_serial_numbers(record),
        }

    def clean_item_name(self):
        return self.cleaned_data['item_name'].strip()

    def to_payload(self):
        payload = super().to_payload()
        payload['item_name'] = self.cleaned_data['item_name']
        payload.update(self.make_model_payload())
        payload['serial_numbers'] = self.cleaned_data['serial_numbers']
        return payload


class PrinterItemForm(MakeModelFormMixin, InventoryItemForm):
    item_type = forms.ChoiceField(choices=())
    make = forms.ChoiceField(choices=())
    model = forms.ChoiceField(choices=())

    field_order = ['item_type', 'make', 'model', 'quantity', 'office', 'status']

    def __init__(self, *args, makes=None, models=None, **kwargs):
        super().__init__(*args, **kwargs)
        choices = [('', 'Select item type')] + [(item_type, item_type) for item_type in PRINTER_ITEM_TYPES]
        existing = self.initial.get('item_type')
        if existing and existing not in PRINTER_ITEM_TYPES:
            choices.append((existing, existing))
        self.fields['item_type'].choices = choices
        self.setup_make_model(makes, models)

    @classmethod
    def initial_from_record(cls, record):
        return {
            'item_type': record.get('item_type') or '',
            'make': record.get('make') or '',
            'model': record.get('model') or '',
            'quantity': record.get('quantity'),
            'office': record.get('office'),
            'status': record.get('status'),
        }

    def to_payload(self):
        payload = super().to_payload()
        payload['item_type'] = self.cleaned_data['item_type']
        payload.update(self.make_model_payload())
        return payload

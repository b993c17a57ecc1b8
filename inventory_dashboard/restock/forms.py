from django import forms

from inventory_dashboard.core.choices import (
    OFFICE_CHOICES, DEFAULT_OFFICE, ITEM_CATEGORY_CHOICES, PRIORITY_CHOICES,
    RESTOCK_STATUS_CHOICES, ITEM_CATEGORY_TO_MAKE_CATEGORY, MAX_QUANTITY, choice_values,
)
from inventory_dashboard.core.forms import MakeModelIdFormMixin, OptionalChoiceField, compact_payload

DEFAULT_ITEM_CATEGORY = 'computers'


class RestockRequestForm(MakeModelIdFormMixin, forms.Form):
    item_category = forms.ChoiceField(choices=ITEM_CATEGORY_CHOICES, initial=DEFAULT_ITEM_CATEGORY)
    item_description = forms.CharField(
        max_length=500,
        widget=forms.TextInput(attrs={'placeholder': 'e.g., Dell OptiPlex desktops for new hires'}),
    )
    make_id = OptionalChoiceField(choices=())
    model_id = OptionalChoiceField(choices=())
    quantity_requested = forms.IntegerField(min_value=1, max_value=MAX_QUANTITY, initial=1)
    office = forms.ChoiceField(choices=OFFICE_CHOICES, initial=DEFAULT_OFFICE)
    priority = forms.ChoiceField(choices=PRIORITY_CHOICES, initial='normal')
    status = forms.ChoiceField(choices=RESTOCK_STATUS_CHOICES, initial='pending')
    requested_by = forms.CharField(max_length=255, required=False)
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}))

    def __init__(self, *args, makes=None, models=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.setup_make_model_ids(makes, models)

    @property
    def make_model_category(self):
        """Catalog category for the item category currently chosen"""
        return make_category_for(self.current_value('item_category'))

    @classmethod
    def initial_from_record(cls, record):
        initial = {
            name: record.get(name)
            for name in (
                'item_category', 'item_description', 'make_id', 'model_id', 'make_name',
                'model_name', 'quantity_requested', 'office', 'priority', 'status',
                'requested_by', 'notes',
            )
        }
        return {key: value for key, value in initial.items() if value is not None}

    def clean_item_description(self):
        return self.cleaned_data['item_description'].strip()

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('model_id') and not cleaned_data.get('make_id'):
            self.add_error('model_id', 'Select a make before choosing a model.')
        return cleaned_data

    def to_payload(self):
        data = dict(self.cleaned_data)
        for name in ('requested_by', 'notes'):
            data[name] = (data.get(name) or '').strip()
        return compact_payload(data)


def make_category_for(item_category):
    """Restock item category -> make/model catalog category (computers by default)"""
    if item_category not in choice_values(ITEM_CATEGORY_CHOICES):
        item_category = DEFAULT_ITEM_CATEGORY
    return ITEM_CATEGORY_TO_MAKE_CATEGORY[item_category]


class RestockFilterForm(forms.Form):
    """List filters; invalid values are dropped rather than reported"""
    status = forms.ChoiceField(choices=[('', 'All Statuses')] + RESTOCK_STATUS_CHOICES, required=False)
    priority = forms.ChoiceField(choices=[('', 'All Priorities')] + PRIORITY_CHOICES, required=False)
    item_category = forms.ChoiceField(choices=[('', 'All Categories')] + ITEM_CATEGORY_CHOICES, required=False)

    def active_filters(self):
        self.is_valid()
        cleaned = getattr(self, 'cleaned_data', {})
        return {name: cleaned.get(name) for name in self.fields if cleaned.get(name)}

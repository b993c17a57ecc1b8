from django import forms

from inventory_dashboard.core.choices import MAKE_MODEL_CATEGORY_CHOICES


class MakeForm(forms.Form):
    name = forms.CharField(max_length=255)
    category = forms.ChoiceField(choices=MAKE_MODEL_CATEGORY_CHOICES, widget=forms.HiddenInput)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        category = self.initial.get('category', '')
        self.fields['name'].widget.attrs['placeholder'] = f"Enter {category} make name"

    def clean_name(self):
        return self.cleaned_data['name'].strip()

    def to_payload(self):
        return {'name': self.cleaned_data['name'], 'category': self.cleaned_data['category']}


class EquipmentModelForm(forms.Form):
    """Catalog model (e.g. "OptiPlex 7090") belonging to one make"""
    make_id = forms.ChoiceField(choices=(), label='Make')
    name = forms.CharField(max_length=255)
    category = forms.ChoiceField(choices=MAKE_MODEL_CATEGORY_CHOICES, widget=forms.HiddenInput)

    def __init__(self, *args, makes=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['make_id'].choices = [('', 'Select a make')] + [
            (make['id'], make['name']) for make in makes or []
        ]
        category = self.initial.get('category', '')
        self.fields['name'].widget.attrs['placeholder'] = f"Enter {category} model name"

    def clean_name(self):
        return self.cleaned_data['name'].strip()

    def to_payload(self):
        return {
            'name': self.cleaned_data['name'],
            'make_id': self.cleaned_data['make_id'],
            'category': self.cleaned_data['category'],
        }

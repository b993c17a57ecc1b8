from django import forms


def _add_missing_choice(choices, value):
    """Keep a record's current value selectable after it left the catalog"""
    if value and value not in [choice for choice, _ in choices]:
        choices.append((value, value))
    return choices


class CurrentValueMixin:

    def current_value(self, name):
        """Submitted value when bound, otherwise the initial value"""
        if self.is_bound:
            return self.data.get(self.add_prefix(name), '')
        return self.initial.get(name) or ''


class MakeModelFormMixin(CurrentValueMixin):
    """
    Make and model dropdowns fed by the catalog.

    Items store make and model by name. The model list only offers models
    of the chosen make; the browser refreshes it from the lookup endpoint
    when the make changes. Forms using the mixin declare ``make`` and
    ``model`` ChoiceFields and call ``setup_make_model`` from ``__init__``.
    """
    make_model_required = False

    def setup_make_model(self, makes, models):
        self.catalog_makes = makes or []
        self.catalog_models = models or []

        make_field = self.fields['make']
        model_field = self.fields['model']
        make_field.required = self.make_model_required
        model_field.required = self.make_model_required

        make_choices = [('', 'Select a make')]
        make_choices += [(make['name'], make['name']) for make in self.catalog_makes]
        make_field.choices = _add_missing_choice(make_choices, self.initial.get('make'))

        selected_make = self.current_value('make')
        model_choices = [('', 'Select a model')]
        model_choices += [
            (model['name'], model['name'])
            for model in self.catalog_models
            if model.get('make_name') == selected_make
        ]
        if selected_make and selected_make == self.initial.get('make'):
            model_choices = _add_missing_choice(model_choices, self.initial.get('model'))
        model_field.choices = model_choices

    def make_model_payload(self):
        """make/model for the API; blank optional values are left out"""
        payload = {}
        for name in ('make', 'model'):
            value = self.cleaned_data.get(name)
            if value:
                payload[name] = value
        return payload


class MakeModelIdFormMixin(CurrentValueMixin):
    """
    Make and model dropdowns keyed by catalog id (restock requests).

    Forms declare ``make_id`` and ``model_id`` ChoiceFields.
    """

    def setup_make_model_ids(self, makes, models):
        self.catalog_makes = makes or []
        self.catalog_models = models or []

        make_choices = [('', 'Select a make (optional)')]
        make_choices += [(make['id'], make['name']) for make in self.catalog_makes]
        self.fields['make_id'].choices = self._with_initial_option(
            make_choices, 'make_id', 'make_name'
        )

        selected_make = self.current_value('make_id')
        model_choices = [('', 'Select a model (optional)')]
        model_choices += [
            (model['id'], model['name'])
            for model in self.catalog_models
            if model.get('make_id') == selected_make
        ]
        if selected_make and selected_make == self.initial.get('make_id'):
            model_choices = self._with_initial_option(model_choices, 'model_id', 'model_name')
        self.fields['model_id'].choices = model_choices

    def _with_initial_option(self, choices, id_field, name_field):
        value = self.initial.get(id_field)
        if value and value not in [choice for choice, _ in choices]:
            choices.append((value, self.initial.get(name_field) or value))
        return choices


class OptionalChoiceField(forms.ChoiceField):
    """Choice field whose empty value is None, so it drops out of API payloads"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(*args, **kwargs)

    def to_python(self, value):
        value = super().to_python(value)
        return value or None


def compact_payload(data):
    """Drop None and blank optional values before sending to the API"""
    return {key: value for key, value in data.items() if value is not None and value != ''}


def apply_api_errors(form, error):
    """Attach the API's per-field validation messages to matching form fields"""
    for field, message in error.field_errors().items():
        if field in form.fields:
            form.add_error(field, message)

from .choices import OFFICES
from .offices import get_selected_office


def office_selection(request):
    """Expose the office selector state to every template"""
    return {
        'offices': OFFICES,
        'selected_office': get_selected_office(request),
    }

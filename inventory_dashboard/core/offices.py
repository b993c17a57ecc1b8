"""
Office selection.

The user picks one office (or all offices) from the header; the choice
survives across pages in the session and narrows every list and report.
"""
import logging

from .choices import OFFICES

logger = logging.getLogger(__name__)

SELECTED_OFFICE_SESSION_KEY = 'sd-inventory-selected-office'


def get_selected_office(request):
    """Selected office name, or None for all offices"""
    office = request.session.get(SELECTED_OFFICE_SESSION_KEY)
    if office in OFFICES:
        return office
    return None


def set_selected_office(request, office):
    """
    Remember the office for this browser session.

    An empty or unknown value clears the selection.
    """
    if office and office in OFFICES:
        request.session[SELECTED_OFFICE_SESSION_KEY] = office
        return office

    if office:
        logger.warning(f"Ignoring unknown office selection: {office!r}")
    request.session.pop(SELECTED_OFFICE_SESSION_KEY, None)
    return None


def filtered_params(request, **extra):
    """Query params for a list call, narrowed to the selected office"""
    params = dict(extra)
    office = get_selected_office(request)
    if office:
        params['office'] = office
    return params

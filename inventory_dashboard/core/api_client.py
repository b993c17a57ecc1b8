"""
Client for the inventory API.

The API owns persistence, identifier generation, audit logging and every
aggregate; the dashboard only reads and writes through the methods below.
Every response is a JSON envelope:

    {"success": bool, "data": ..., "count": int,
     "error": str, "message": str, "details": [{"field", "message", "type"}]}

Failures surface as ApiError (the API said no) or ApiConnectionError (the
API could not be reached or did not answer with JSON).
"""
import logging
from urllib.parse import quote

import requests
from django.conf import settings

from .exceptions import ApiError, ApiConnectionError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:3000/api'
DEFAULT_TIMEOUT = 10


def build_query_params(params):
    """Drop unset filters so they never reach the API as empty values"""
    if not params:
        return {}
    return {
        key: value for key, value in params.items()
        if value is not None and value != ''
    }


def _segment(value):
    return quote(str(value), safe='')


class InventoryApiClient:
    """Thin wrapper over requests.Session with one method per API endpoint"""

    session_class = requests.Session

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or getattr(settings, 'INVENTORY_API_BASE_URL', DEFAULT_BASE_URL)).rstrip('/')
        self.timeout = timeout or getattr(settings, 'INVENTORY_API_TIMEOUT', DEFAULT_TIMEOUT)
        self.session = session or self.session_class()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    def request(self, method, endpoint, params=None, payload=None):
        """
        Send one request and unwrap the envelope.

        Returns the envelope's ``data`` (None when the API sends no body).
        """
        url = f"{self.base_url}{endpoint}"
        query = build_query_params(params)
        logger.debug(f"Inventory API {method} {endpoint} params={query}")

        try:
            response = self.session.request(
                method,
                url,
                params=query or None,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Inventory API {method} {endpoint} failed: {str(e)}", exc_info=True)
            raise ApiConnectionError(message=str(e)) from e

        if not response.content:
            if response.ok:
                return None
            logger.warning(f"Inventory API {method} {endpoint} returned {response.status_code} with no body")
            raise ApiError(f'HTTP error! status: {response.status_code}', status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Inventory API {method} {endpoint} returned invalid JSON (status {response.status_code})", exc_info=True)
            raise ApiConnectionError(message=str(e), status_code=response.status_code) from e

        if not isinstance(body, dict):
            body = {}

        if not response.ok:
            error = body.get('error') or f'HTTP error! status: {response.status_code}'
            logger.warning(f"Inventory API {method} {endpoint} returned {response.status_code}: {error}")
            raise ApiError(
                error,
                message=body.get('message'),
                details=body.get('details'),
                status_code=response.status_code,
            )

        if not body.get('success'):
            error = body.get('error') or 'An error occurred'
            logger.warning(f"Inventory API {method} {endpoint} reported failure: {error}")
            raise ApiError(
                error,
                message=body.get('message'),
                details=body.get('details'),
                status_code=response.status_code,
            )

        return body.get('data')

    def get(self, endpoint, params=None):
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint, payload):
        return self.request('POST', endpoint, payload=payload)

    def put(self, endpoint, payload):
        return self.request('PUT', endpoint, payload=payload)

    def delete(self, endpoint):
        return self.request('DELETE', endpoint)

    # ==================== COMPUTERS ====================

    def list_computers(self, params=None):
        return self.get('/computers', params)

    def get_computer(self, computer_id):
        return self.get(f'/computers/{_segment(computer_id)}')

    def create_computer(self, data):
        return self.post('/computers', data)

    def update_computer(self, computer_id, data):
        return self.put(f'/computers/{_segment(computer_id)}', data)

    def delete_computer(self, computer_id):
        return self.delete(f'/computers/{_segment(computer_id)}')

    def computer_counts(self):
        return self.get('/computers/counts')

    # ==================== PERIPHERALS ====================

    def list_peripherals(self, params=None):
        return self.get('/peripherals', params)

    def get_peripheral(self, peripheral_id):
        return self.get(f'/peripherals/{_segment(peripheral_id)}')

    def create_peripheral(self, data):
        return self.post('/peripherals', data)

    def update_peripheral(self, peripheral_id, data):
        return self.put(f'/peripherals/{_segment(peripheral_id)}', data)

    def delete_peripheral(self, peripheral_id):
        return self.delete(f'/peripherals/{_segment(peripheral_id)}')

    def peripheral_counts(self):
        return self.get('/peripherals/counts')

    # ==================== PRINTER ITEMS ====================

    def list_printer_items(self, params=None):
        return self.get('/printer-items', params)

    def get_printer_item(self, item_id):
        return self.get(f'/printer-items/{_segment(item_id)}')

    def create_printer_item(self, data):
        return self.post('/printer-items', data)

    def update_printer_item(self, item_id, data):
        return self.put(f'/printer-items/{_segment(item_id)}', data)

    def delete_printer_item(self, item_id):
        return self.delete(f'/printer-items/{_segment(item_id)}')

    def printer_item_counts(self):
        return self.get('/printer-items/counts')

    def printer_items_by_type(self, item_type, office=None):
        return self.get(f'/printer-items/by-type/{_segment(item_type)}', {'office': office})

    # ==================== RESTOCK REQUESTS ====================

    def list_restock_requests(self, params=None):
        return self.get('/restock-requests', params)

    def get_restock_request(self, request_id):
        return self.get(f'/restock-requests/{_segment(request_id)}')

    def create_restock_request(self, data):
        return self.post('/restock-requests', data)

    def update_restock_request(self, request_id, data):
        return self.put(f'/restock-requests/{_segment(request_id)}', data)

    def delete_restock_request(self, request_id):
        return self.delete(f'/restock-requests/{_segment(request_id)}')

    def restock_status_counts(self, office=None):
        return self.get('/restock-requests/status-counts', {'office': office})

    def pending_restock_by_priority(self, office=None):
        return self.get('/restock-requests/pending-priority', {'office': office})

    # ==================== AUDIT LOG ====================

    def list_audit_logs(self, params=None):
        return self.get('/audit-log', params)

    def recent_audit_logs(self, params=None):
        return self.get('/audit-log/recent', params)

    def audit_action_counts(self, office=None, days=None):
        return self.get('/audit-log/action-counts', {'office': office, 'days': days})

    def audit_table_activity(self, office=None, days=None):
        return self.get('/audit-log/table-activity', {'office': office, 'days': days})

    def audit_log_for_record(self, table_name, record_id):
        return self.get(f'/audit-log/{_segment(table_name)}/{_segment(record_id)}')

    # ==================== REPORTS ====================

    def inventory_summary_report(self, office=None):
        return self.get('/reports/inventory-summary', {'office': office})

    def restock_requests_report(self, office=None):
        return self.get('/reports/restock-requests', {'office': office})

    def activity_report(self, office=None):
        return self.get('/reports/activity', {'office': office})

    def office_comparison_report(self):
        return self.get('/reports/office-comparison')

    # ==================== MAKES & MODELS ====================

    def list_makes(self, category=None):
        return self.get('/makes', {'category': category})

    def get_make(self, make_id):
        return self.get(f'/makes/{_segment(make_id)}')

    def create_make(self, data):
        return self.post('/makes', data)

    def update_make(self, make_id, data):
        return self.put(f'/makes/{_segment(make_id)}', data)

    def delete_make(self, make_id):
        return self.delete(f'/makes/{_segment(make_id)}')

    def list_models(self, category=None, make_id=None):
        return self.get('/models', {'category': category, 'make_id': make_id})

    def get_model(self, model_id):
        return self.get(f'/models/{_segment(model_id)}')

    def create_model(self, data):
        return self.post('/models', data)

    def update_model(self, model_id, data):
        return self.put(f'/models/{_segment(model_id)}', data)

    def delete_model(self, model_id):
        return self.delete(f'/models/{_segment(model_id)}')

    # ==================== HEALTH ====================

    def health(self):
        return self.get('/health')


def get_api_client():
    """Client configured from settings; views build one per request"""
    return InventoryApiClient()

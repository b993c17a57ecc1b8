class ApiError(Exception):
    """
    Raised when the inventory API rejects a request or answers with an error envelope.

    ``str(error)`` is the message shown to the user; ``message`` and
    ``details`` carry the API's extra explanation and per-field errors.
    """

    def __init__(self, error, message=None, details=None, status_code=None):
        super().__init__(error)
        self.error = error
        self.message = message
        self.details = details or []
        self.status_code = status_code

    def field_errors(self):
        """Map of field name -> message from the API's validation details"""
        errors = {}
        for detail in self.details:
            if isinstance(detail, dict) and detail.get('field'):
                errors[detail['field']] = detail.get('message', '')
        return errors


class ApiConnectionError(ApiError):
    """The inventory API could not be reached or returned something that is not JSON"""

    def __init__(self, message=None, status_code=None):
        super().__init__('Network error', message=message, status_code=status_code)

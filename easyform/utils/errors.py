"""
Error taxonomy shared by services and routes.

Every error carries the HTTP status it maps to and a short machine-readable
code; main.py turns them into {"error": code, "message": text} responses.
"""
from typing import Optional


class EasyFormError(Exception):
    status_code = 500
    error = "internal_error"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.message = message or ""
        if error:
            self.error = error
        super().__init__(self.message or self.error)

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class ValidationError(EasyFormError):
    """Missing or empty required field"""
    status_code = 400
    error = "missing_fields"


class NotFoundError(EasyFormError):
    status_code = 404
    error = "not_found"


class ConflictError(EasyFormError):
    """Identifier collision on create"""
    status_code = 409
    error = "conflict"


class MethodNotAllowedError(EasyFormError):
    status_code = 405
    error = "method_not_allowed"


class StoreError(EasyFormError):
    """Any data-store failure, connection or query"""
    status_code = 500
    error = "db_error"


class RenderError(EasyFormError):
    """PDF rendering failed before any output was sent"""
    status_code = 500
    error = "pdf_error"

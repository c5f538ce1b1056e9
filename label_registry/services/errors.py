"""
Domain errors of the label registry.

Each error carries the HTTP status it maps to; the exception handler in
``label_registry.main`` turns them into ``{"error": message}`` responses.
"""


class RegistryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    status_code = 400


class UnauthorizedError(RegistryError):
    status_code = 401


class NotFoundError(RegistryError):
    status_code = 404


class ConflictError(RegistryError):
    status_code = 409

"""
API Key Middleware

Optional shared-secret gate. When an API key is configured every request
must carry it in the ``x-api-key`` header; otherwise the request is
answered with 401 before reaching any route. Without a configured key the
middleware lets everything through.
"""

import hmac
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from label_registry.services.errors import UnauthorizedError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def is_valid_api_key(provided: Optional[str], expected: str) -> bool:
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


class ApiKeyMiddleware:
    """
    Enforces the ``x-api-key`` header on all HTTP requests.

    The key is passed explicitly so each app instance can carry its own
    settings.
    """

    def __init__(self, app, api_key: Optional[str] = None):
        self.app = app
        self.api_key = api_key or None

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not self.api_key:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if is_valid_api_key(request.headers.get(API_KEY_HEADER), self.api_key):
            await self.app(scope, receive, send)
            return

        logger.info(f"Rejected request without valid API key: {scope.get('path', '')}")
        error = UnauthorizedError("No autorizado: falta o es inválida la x-api-key")
        response = JSONResponse(content={"error": error.message}, status_code=error.status_code)
        await response(scope, receive, send)

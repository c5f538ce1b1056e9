from label_registry.middleware.api_key import ApiKeyMiddleware
from label_registry.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ApiKeyMiddleware",
    "SecurityHeadersMiddleware",
]

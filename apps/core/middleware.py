"""
API key authentication middleware.

Every endpoint except the health probe and the admin site
requires a valid API key in the X-API-KEY header.
"""

import hmac
import logging

from django.conf import settings
from django.http import JsonResponse

from apps.core.utils import error_payload

logger = logging.getLogger(__name__)

# Paths that don't require authentication
EXEMPT_PREFIXES = (
    '/health',
    '/admin/',
)


def _key_matches(provided_key: str, api_keys) -> bool:
    """Compare against every configured key in constant time."""
    matched = False
    for key in api_keys:
        if hmac.compare_digest(provided_key.encode(), key.encode()):
            matched = True
    return matched


class APIKeyMiddleware:
    """
    Middleware that checks for a valid API key in the X-API-KEY header.

    If API_KEYS is empty in settings (e.g. local development), the check
    is disabled and all requests pass through.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith(EXEMPT_PREFIXES):
            return self.get_response(request)

        api_keys = getattr(settings, 'API_KEYS', [])
        if not api_keys:
            return self.get_response(request)

        provided_key = request.META.get('HTTP_X_API_KEY', '')

        if not provided_key:
            logger.warning(
                "%s %s rejected: missing API key",
                request.method,
                request.path,
            )
            return JsonResponse(
                error_payload(
                    401,
                    'Authentication required. Provide X-API-KEY header.',
                ),
                status=401,
            )

        if not _key_matches(provided_key, api_keys):
            logger.warning(
                "%s %s rejected: invalid API key",
                request.method,
                request.path,
            )
            return JsonResponse(
                error_payload(403, 'Invalid API key.'),
                status=403,
            )

        return self.get_response(request)

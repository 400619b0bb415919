"""
Middleware for security headers, rate limiting and error handling
"""

import logging
import time

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from django.core.cache import cache
from django.conf import settings

from .utils import get_client_ip

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('audit')


class SecurityMiddleware(MiddlewareMixin):
    """
    Rate limiting per path prefix plus security headers on every response
    """

    def __init__(self, get_response):
        self.get_response = get_response
        super().__init__(get_response)

    def __call__(self, request):
        retry_after = self._is_rate_limited(request)
        if retry_after:
            return self._rate_limit_response(request, retry_after)

        response = self.get_response(request)

        self._add_security_headers(response)

        return response

    def _match_rate_limit(self, path):
        for path_prefix, limit_config in settings.RATE_LIMITS.items():
            if path.startswith(path_prefix):
                return limit_config
        if path.startswith('/api/'):
            return settings.DEFAULT_API_RATE_LIMIT
        return None

    def _is_rate_limited(self, request):
        """
        Return the seconds until the current window resets when the limit is
        exceeded, or None when the request may pass.

        Counters are keyed by a fixed window, so retries while blocked do not
        push the reset time back.
        """
        if not getattr(settings, 'RATELIMIT_ENABLE', True):
            return None

        rate_limit = self._match_rate_limit(request.path)
        if not rate_limit:
            return None

        window = rate_limit['window']
        now = int(time.time())
        remaining = window - now % window
        ip_address = get_client_ip(request)
        cache_key = f"rate_limit:ip:{ip_address}:{request.path}:{now // window}"

        if cache.add(cache_key, 1, remaining):
            return None
        try:
            requests_made = cache.incr(cache_key)
        except ValueError:
            # expired between add and incr
            cache.set(cache_key, 1, remaining)
            return None

        if requests_made > rate_limit['limit']:
            return remaining
        return None

    def _rate_limit_response(self, request, retry_after):
        """Return rate limit exceeded response"""
        ip_address = get_client_ip(request)
        security_logger.warning(f"RATE_LIMIT_EXCEEDED path={request.path} ip={ip_address}")

        response = JsonResponse({'error': 'Too many requests, please try again later'}, status=429)
        response['Retry-After'] = str(retry_after)
        return response

    def _add_security_headers(self, response):
        """Add security headers to response"""
        response['X-Frame-Options'] = 'DENY'
        response['X-Content-Type-Options'] = 'nosniff'
        response['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        if not settings.DEBUG:
            response['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        if 'Server' in response:
            del response['Server']


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Turns uncaught exceptions on API paths into a generic JSON 500
    """

    def process_exception(self, request, exception):
        logger.error(f"Exception in {request.path}: {str(exception)}", exc_info=True)

        if request.path.startswith('/api/'):
            return JsonResponse({'error': 'Internal server error'}, status=500)

        return None

"""
Common utility functions for API responses
"""
import math

from rest_framework.response import Response
from rest_framework import status


def success_response(data=None, status_code=status.HTTP_200_OK):
    """Plain JSON success response"""
    return Response(data if data is not None else {'success': True}, status=status_code)


def parse_int(value, default, minimum=None, maximum=None):
    """Parse a query parameter as int, falling back to ``default``"""
    try:
        result = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and result < minimum:
        result = minimum
    if maximum is not None and result > maximum:
        result = maximum
    return result


def parse_bool(value):
    if value is None:
        return None
    return str(value).lower() in ('1', 'true', 'yes', 'on')


def get_page_params(request, default_limit=20, max_limit=100, limit_param='limit'):
    """Return ``(page, limit)`` from the query string"""
    page = parse_int(request.query_params.get('page'), 1, minimum=1)
    limit = parse_int(request.query_params.get(limit_param), default_limit, minimum=1, maximum=max_limit)
    return page, limit


def paginate_queryset(queryset, page, limit):
    """
    Slice a queryset for one page.

    Returns ``(items, total, total_pages)``.
    """
    total = queryset.count()
    total_pages = math.ceil(total / limit) if total else 0
    offset = (page - 1) * limit
    return list(queryset[offset:offset + limit]), total, total_pages


def pagination_meta(total, page, limit, total_pages):
    return {
        'total': total,
        'page': page,
        'limit': limit,
        'totalPages': total_pages,
    }


def paginated_response(queryset, serializer_class, request, key='results', default_limit=20, context=None):
    """
    Standard paginated response format ``{<key>: [...], pagination: {...}}``
    """
    page, limit = get_page_params(request, default_limit=default_limit)
    items, total, total_pages = paginate_queryset(queryset, page, limit)
    serializer = serializer_class(items, many=True, context=context or {'request': request})
    return success_response({
        key: serializer.data,
        'pagination': pagination_meta(total, page, limit, total_pages),
    })


def get_client_ip(request):
    """Get client IP address"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '127.0.0.1')

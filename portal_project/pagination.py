"""
Pagination for function-based list views.

List views return a plain serialized list; the `auto_paginate` decorator slices it
into pages and wraps it in the portal's response envelope:
{
    "status": "success",
    "message": "",
    "data": {"count": ..., "next": ..., "previous": ..., "results": [...]}
}
"""
from functools import wraps

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    Page-number pagination used by every list endpoint.

    Query Parameters:
    - page: Page number (default: 1)
    - page_size: Items per page (default: 25, max: 200)
    - no_pagination: When "true", the full list is returned unpaged
      (dropdowns such as port or terminal pickers need everything)
    """
    page_size = 25
    page_size_query_param = 'page_size'
    max_page_size = 200

    def get_paginated_response(self, data):
        return Response({
            'status': 'success',
            'message': '',
            'data': {
                'count': self.page.paginator.count,
                'next': self.get_next_link(),
                'previous': self.get_previous_link(),
                'results': data
            }
        })


def auto_paginate(view_func):
    """
    Decorator that paginates list responses from function-based views.

    Usage:
        @api_view(['GET', 'POST'])
        @require_permission('ports')
        @auto_paginate
        def port_list(request):
            if request.method == 'GET':
                serializer = PortSerializer(Port.objects.all(), many=True)
                return Response(serializer.data)
            ...

    Only GET responses whose data is a list are paginated. Detail views,
    POST responses and error responses pass through untouched.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        response = view_func(request, *args, **kwargs)

        if (
            request.method == 'GET' and
            isinstance(response, Response) and
            isinstance(response.data, list) and
            str(request.query_params.get('no_pagination', '')).lower() != 'true'
        ):
            paginator = StandardResultsSetPagination()
            page = paginator.paginate_queryset(response.data, request)
            if page is not None:
                return paginator.get_paginated_response(page)

        return response

    return wrapper

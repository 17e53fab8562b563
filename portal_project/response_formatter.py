"""
Response envelope for the portal API.

Every response body has the shape:
{
    "status": "success" | "error",
    "message": "string message or empty",
    "data": {...} | [] | null
}

Views keep returning plain DRF Responses (`{'error': ...}` for business errors,
serializer data for success); the renderer and exception handler below fold
them into the envelope.
"""
import logging

from rest_framework import status as http_status
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    DRF exception handler that converts framework errors into the envelope.

    Exceptions DRF does not handle (response is None) are logged here and
    left to Django's 500 handling.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s", getattr(view, '__name__', view.__class__.__name__ if view else 'unknown')
        )
        return None

    response.data = format_error_response(response.data, response.status_code)
    return response


def format_error_response(errors, status_code):
    """
    Flatten the different DRF error shapes into a single message.

    - {"field": ["error1", "error2"]} -> "field: error1, error2"
    - {"detail": "message"} or {"error": "message"} -> "message"
    - ["error1", "error2"] -> "error1, error2"
    """
    message = ""
    data = None

    if isinstance(errors, dict):
        error_messages = []
        for field, field_errors in errors.items():
            if field in ('detail', 'error'):
                message = str(field_errors)
            elif isinstance(field_errors, list):
                error_messages.append(f"{field}: {', '.join(str(e) for e in field_errors)}")
            elif isinstance(field_errors, dict):
                error_messages.append(f"{field}: {format_nested_errors(field_errors)}")
            else:
                error_messages.append(f"{field}: {field_errors}")

        if error_messages:
            joined = "; ".join(error_messages)
            message = f"{message}; {joined}" if message else joined
            data = errors

    elif isinstance(errors, list):
        message = ", ".join(str(e) for e in errors)

    else:
        message = str(errors)

    return {
        "status": "error",
        "message": message,
        "data": data
    }


def format_nested_errors(errors_dict):
    """Format nested error dictionaries."""
    messages = []
    for key, value in errors_dict.items():
        if isinstance(value, list):
            messages.append(f"{key}: {', '.join(str(v) for v in value)}")
        elif isinstance(value, dict):
            messages.append(f"{key}: {format_nested_errors(value)}")
        else:
            messages.append(f"{key}: {value}")
    return "; ".join(messages)


class StandardizedJSONRenderer(JSONRenderer):
    """JSON renderer that wraps bodies that are not yet in the envelope."""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        if response is not None and response.status_code == http_status.HTTP_204_NO_CONTENT:
            return b''

        if response is not None and not self.is_already_formatted(data):
            if response.status_code >= 400:
                data = format_error_response(data, response.status_code)
            else:
                data = self.format_success_response(data)

        return super().render(data, accepted_media_type, renderer_context)

    def is_already_formatted(self, data):
        return isinstance(data, dict) and {'status', 'message', 'data'} <= set(data.keys())

    def format_success_response(self, data):
        message = ""
        if isinstance(data, dict) and 'message' in data and len(data) == 1:
            # {"message": "..."} bodies carry no payload
            return {"status": "success", "message": str(data['message']), "data": None}
        if isinstance(data, dict) and 'detail' in data:
            message = str(data['detail'])
            data = None
        elif data is None or (isinstance(data, dict) and not data):
            data = None

        return {
            "status": "success",
            "message": message,
            "data": data
        }


def success_response(data=None, message="", status_code=http_status.HTTP_200_OK):
    """
    Build an already-enveloped success response.

        return success_response(
            data=TerminalSerializer(terminal).data,
            message="Terminal activated successfully",
        )
    """
    return Response({
        "status": "success",
        "message": message,
        "data": data
    }, status=status_code)


def validation_error_response(exc, status_code=http_status.HTTP_400_BAD_REQUEST):
    """
    Turn a django.core.exceptions.ValidationError raised by a service or a
    model delete() into a 400 response.

        except ValidationError as e:
            return validation_error_response(e)
    """
    if hasattr(exc, 'message_dict'):
        return Response(exc.message_dict, status=status_code)
    return Response({'error': '; '.join(exc.messages)}, status=status_code)


def error_response(message, data=None, status_code=http_status.HTTP_400_BAD_REQUEST):
    """
    Build an already-enveloped error response.

        return error_response("Terminal not found", status_code=status.HTTP_404_NOT_FOUND)
    """
    return Response({
        "status": "error",
        "message": message,
        "data": data
    }, status=status_code)

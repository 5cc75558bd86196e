import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


class InvalidState(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The resource is not in a state that allows this operation."
    default_code = "invalid_state"


def _first_message(detail):
    """Pull one human readable message out of a (possibly nested) DRF error detail."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        for value in detail.values():
            return _first_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc, context):
    """
    Renders every API error as {"success": false, "message": ..., "status_code": ...}.
    Validation errors keep their field-level details under "errors".
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    payload = {
        "success": False,
        "message": _first_message(response.data),
        "status_code": response.status_code,
    }
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        payload["errors"] = response.data
    response.data = payload
    return response

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from dispatch.dispatcher import InvalidCallUpdateError
from dispatch.state_machines.ambulance_state import AmbulanceStateException
from dispatch.state_machines.call_state import CallStateException
from hospitals.repository import RecordNotFoundError, StoreUnavailableError
from routing.geo import InvalidCoordinateError

logger = logging.getLogger(__name__)


def dispatch_exception_handler(exc, context):
    """
    DRF exception handler that maps domain errors to HTTP responses.
    Anything unrecognised falls through to DRF (and then Django) as usual.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, RecordNotFoundError):
        return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, (CallStateException, AmbulanceStateException)):
        return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)

    if isinstance(exc, StoreUnavailableError):
        logger.error(f"Hospital store unavailable: {exc}")
        return Response({"error": "Hospital data is unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    if isinstance(exc, (InvalidCoordinateError, InvalidCallUpdateError)):
        return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return None

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import (
    CatalogStorageException,
    DomainException,
    EntityNotFoundException,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Translate domain exceptions into API responses.

    Not found maps to 404, every other domain error to 400. Anything else
    goes through the default DRF handler.
    """
    if isinstance(exc, DomainException):
        if isinstance(exc, EntityNotFoundException):
            status_code = status.HTTP_404_NOT_FOUND
        else:
            status_code = status.HTTP_400_BAD_REQUEST

        if isinstance(exc, CatalogStorageException):
            logger.error(f"Catalog storage error: {exc.message}")
        else:
            logger.info(f"Rejected request ({exc.code}): {exc.message}")

        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'details': exc.details,
            },
            status=status_code,
        )

    return exception_handler(exc, context)

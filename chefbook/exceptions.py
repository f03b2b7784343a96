"""
Traduction des erreurs du catalogue en réponses HTTP.

Déclaré dans REST_FRAMEWORK['EXCEPTION_HANDLER'].
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from recipes.exceptions import (
    AuthenticationRequired,
    CatalogError,
    DuplicateKey,
    NotFound,
    ReferenceConflict,
    RoleRequired,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _catalog_error_response(exc):
    if isinstance(exc, ValidationError):
        return Response(
            {'message': exc.message, 'errors': exc.errors},
            status=status.HTTP_400_BAD_REQUEST
        )
    if isinstance(exc, NotFound):
        return Response(
            {'message': exc.message, 'kind': exc.kind, 'id': exc.entity_id},
            status=status.HTTP_404_NOT_FOUND
        )
    if isinstance(exc, DuplicateKey):
        return Response(
            {'message': exc.message, 'errors': {exc.field: [exc.message]}},
            status=status.HTTP_409_CONFLICT
        )
    if isinstance(exc, ReferenceConflict):
        return Response(
            {'message': exc.message, 'kind': exc.kind, 'id': exc.entity_id},
            status=status.HTTP_409_CONFLICT
        )
    if isinstance(exc, AuthenticationRequired):
        return Response({'message': exc.message}, status=status.HTTP_401_UNAUTHORIZED)
    if isinstance(exc, RoleRequired):
        return Response({'message': exc.message}, status=status.HTTP_403_FORBIDDEN)
    return Response({'message': exc.message}, status=status.HTTP_400_BAD_REQUEST)


def catalog_exception_handler(exc, context):
    if isinstance(exc, CatalogError):
        return _catalog_error_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        "[ExceptionHandler] Erreur non gérée dans %s",
        view.__class__.__name__ if view else 'vue inconnue'
    )
    body = {'message': 'Erreur interne du serveur.'}
    if settings.DEBUG:
        body['detail'] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

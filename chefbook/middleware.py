import logging
from time import perf_counter

from django.conf import settings
from django.db import connection, reset_queries

logger = logging.getLogger(__name__)


class TimingMiddleware:
    """
    Middleware simple pour mesurer le temps total et le nombre de requêtes SQL
    des appels /api/. Le header Server-Timing n'est exposé qu'en DEBUG.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith('/api/'):
            return self.get_response(request)

        reset_queries()
        t0 = perf_counter()
        response = self.get_response(request)
        total_ms = (perf_counter() - t0) * 1000
        # connection.queries n'est alimenté qu'en DEBUG (ou sous CaptureQueriesContext)
        num_queries = len(connection.queries)

        logger.debug(
            "[TimingMiddleware] %s %s status=%s total_ms=%.1f db_queries=%d",
            request.method, request.path, response.status_code, total_ms, num_queries,
        )
        if settings.DEBUG:
            response.headers['Server-Timing'] = (
                f"app;dur={total_ms:.1f}, queries;desc=\"{num_queries} SQL\""
            )
        return response

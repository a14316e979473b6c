"""
Health Check Module.
"""
import logging
import time
from typing import Dict, Any

from django.db import connection
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health check status constants."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


def check_database() -> Dict[str, Any]:
    """Check database connectivity."""
    start = time.time()
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "name": "database",
            "status": HealthStatus.UNHEALTHY,
            "error": str(e),
        }
    return {
        "name": "database",
        "status": HealthStatus.HEALTHY,
        "latency_ms": round((time.time() - start) * 1000, 2),
    }


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """Report service liveness and database reachability."""
    database = check_database()
    healthy = database["status"] == HealthStatus.HEALTHY
    return Response(
        {
            "status": HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
            "checks": [database],
        },
        status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )

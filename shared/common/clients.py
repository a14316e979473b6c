# shared/common/clients.py
"""
HTTP Clients for External APIs
"""

import time
import logging
from typing import Dict, Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ExternalServiceError(Exception):
    """Raised when an outbound HTTP call fails for any reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CircuitBreakerError(ExternalServiceError):
    """Raised when the circuit breaker is open"""


# =============================================================================
# CIRCUIT BREAKER
# =============================================================================

class CircuitBreaker:
    """
    Stops calling a failing upstream for ``timeout`` seconds after
    ``failure_threshold`` consecutive failures.
    """

    def __init__(self, failure_threshold: int = 5, success_threshold: int = 2, timeout: int = 30):
        self.failure_threshold = failure_threshold
        self.success_threshold = success_threshold
        self.timeout = timeout
        self.failure_count = 0
        self.success_count = 0
        self.state = 'closed'  # closed, open, half_open
        self.last_failure_time = None

    def _should_try_reset(self) -> bool:
        if self.last_failure_time is None:
            return True
        return time.monotonic() - self.last_failure_time >= self.timeout

    def record_success(self):
        if self.state == 'half_open':
            self.success_count += 1
            if self.success_count >= self.success_threshold:
                self._reset()
        elif self.state == 'closed':
            self.failure_count = 0

    def record_failure(self):
        self.failure_count += 1
        self.last_failure_time = time.monotonic()
        if self.state == 'half_open' or self.failure_count >= self.failure_threshold:
            self.state = 'open'
            self.success_count = 0
            logger.warning(f"Circuit breaker opened after {self.failure_count} failures")

    def _reset(self):
        self.state = 'closed'
        self.failure_count = 0
        self.success_count = 0
        self.last_failure_time = None
        logger.info("Circuit breaker reset to closed state")

    def can_execute(self) -> bool:
        if self.state == 'closed':
            return True
        if self.state == 'open':
            if self._should_try_reset():
                self.state = 'half_open'
                return True
            return False
        return True  # half_open


# =============================================================================
# BASE HTTP CLIENT
# =============================================================================

class BaseServiceClient:
    """
    Base class for synchronous calls to an external JSON API.

    Every failure (transport, non-2xx status, open circuit, undecodable body)
    is raised as ``ExternalServiceError`` so callers handle a single type.
    """

    def __init__(self, service_name: str, base_url: str, timeout: float = 10.0, transport: httpx.BaseTransport = None):
        self.service_name = service_name
        self.base_url = base_url.rstrip('/')
        self.timeout = httpx.Timeout(timeout, connect=5.0)
        self.transport = transport
        self.circuit_breaker = CircuitBreaker()

    def _get_headers(self, extra_headers: Dict = None) -> Dict:
        """Build request headers"""
        headers = {'Accept': 'application/json'}
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Dict = None,
        data: Dict = None,
        form: Dict = None,
        headers: Dict = None
    ) -> Dict[str, Any]:
        """Make HTTP request and return the decoded JSON body ({} when empty)"""
        if not self.circuit_breaker.can_execute():
            raise CircuitBreakerError(f"Circuit breaker open for {self.service_name}")

        url = f"{self.base_url}{path}"

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = client.request(
                    method,
                    url,
                    params=params,
                    json=data,
                    data=form,
                    headers=self._get_headers(headers),
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"HTTP error calling {self.service_name}: {e.response.status_code}",
                    extra={'url': url, 'status_code': e.response.status_code}
                )
                if e.response.status_code >= 500:
                    self.circuit_breaker.record_failure()
                raise ExternalServiceError(
                    f"{self.service_name} returned {e.response.status_code}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.RequestError as e:
                logger.error(f"Request error calling {self.service_name}: {e}")
                self.circuit_breaker.record_failure()
                raise ExternalServiceError(f"{self.service_name} unreachable: {e}") from e

        self.circuit_breaker.record_success()

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"{self.service_name} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

"""Request logging middleware.

Binds a correlation id for the lifetime of each request, echoes it back in
``X-Correlation-ID``, logs completion with timing and flags slow requests.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.logging import api_logger, bind_context, clear_context, generate_correlation_id

CORRELATION_HEADER = "X-Correlation-ID"

log = api_logger()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request logging context.

    Paths in ``quiet_paths`` (health probes) are logged at debug level.
    """

    def __init__(self, app, slow_threshold_ms: float = 1000, quiet_paths: tuple[str, ...] = ("/health",)):
        super().__init__(app)
        self.slow_threshold_ms = slow_threshold_ms
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        quiet = request.url.path in self.quiet_paths

        clear_context()
        bind_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception("request_failed", error_type=type(exc).__name__, duration_ms=_elapsed_ms(start))
            raise
        else:
            duration_ms = _elapsed_ms(start)
            response.headers[CORRELATION_HEADER] = correlation_id
            self._log_completion(response.status_code, duration_ms, quiet)
            return response
        finally:
            clear_context()

    def _log_completion(self, status: int, duration_ms: float, quiet: bool) -> None:
        if status >= 500:
            log.error("request_completed", status=status, duration_ms=duration_ms)
        elif status >= 400:
            log.warning("request_completed", status=status, duration_ms=duration_ms)
        elif quiet:
            log.debug("request_completed", status=status, duration_ms=duration_ms)
        else:
            log.info("request_completed", status=status, duration_ms=duration_ms)

        if duration_ms > self.slow_threshold_ms:
            log.warning("slow_request", duration_ms=duration_ms, threshold_ms=self.slow_threshold_ms)

from prometheus_client import Counter, Histogram, Gauge
from fastapi import Request, Response
from fastapi.routing import APIRoute
import time
from typing import Callable


# -------------------------
# HTTP Metrics
# -------------------------

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency',
    ['method', 'endpoint'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'HTTP requests currently in progress',
    ['method', 'endpoint']
)

# -------------------------
# Production Metrics
# -------------------------

production_reconciliations_total = Counter(
    'production_reconciliations_total',
    'Daily production report reconciliations triggered by target writes',
    ['action', 'outcome']  # outcome: upserted, deleted, skipped, failed
)

daily_production_quantity = Gauge(
    'daily_production_quantity',
    'Production quantity of the most recently reconciled report row',
    ['line_no']
)

# -------------------------
# Business Metrics
# -------------------------

profit_loss_net_profit = Gauge(
    'profit_loss_net_profit',
    'Net profit of the most recently computed period',
    ['period']
)


# -------------------------
# Middleware
# -------------------------

class PrometheusMiddleware:
    """Automatically track HTTP metrics"""

    async def __call__(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics endpoint itself
        if request.url.path == "/metrics":
            return await call_next(request)

        # Get endpoint pattern (not full path with IDs)
        endpoint = self._get_endpoint_pattern(request)
        method = request.method

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()

        try:
            response = await call_next(request)

            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()

            http_request_duration_seconds.labels(
                method=method,
                endpoint=endpoint
            ).observe(time.time() - start_time)

            return response

        except Exception:
            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=500
            ).inc()
            raise

        finally:
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    def _get_endpoint_pattern(self, request: Request) -> str:
        """Get route pattern like /api/targets/{target_id}"""
        path = request.url.path
        for route in request.app.routes:
            if isinstance(route, APIRoute) and route.path_regex.match(path):
                return route.path
        return path


# -------------------------
# Helper Functions
# -------------------------

def track_reconciliation(action: str, outcome: str):
    """Count one reconciliation by action and outcome"""
    production_reconciliations_total.labels(action=action, outcome=outcome).inc()


def update_daily_production(line_no: str, quantity: int):
    """Update production quantity gauge for a line"""
    daily_production_quantity.labels(line_no=line_no).set(quantity)


def update_net_profit(period: str, net_profit: float):
    """Update net profit gauge"""
    profit_loss_net_profit.labels(period=period).set(net_profit)

"""
Request Logger

FLOW OVERVIEW
- configure_logging(app)
  • Set the `laptrack` logger level from LOG_LEVEL and attach a stream handler once.
- register_request_hooks(app)
  • before_request: assign a correlation id (incoming X-Request-ID or uuid4) and start a timer.
  • after_request: echo X-Request-ID, log one line per request, record Prometheus metrics.
"""

import logging
import time
import uuid
from flask import g, request, current_app
from .prom_metrics import observe_request

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(app):
    """Configure package and Flask app loggers from app config"""
    level_name = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)

    package_logger = logging.getLogger('laptrack')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    app.logger.setLevel(level)


def client_ip():
    """Best-effort client address, honouring X-Forwarded-For"""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def register_request_hooks(app):
    """Attach request logging and metrics hooks"""

    @app.before_request
    def start_request():
        g.request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        g.request_started = time.perf_counter()

    @app.after_request
    def log_response(response):
        started = g.pop('request_started', None)
        latency = time.perf_counter() - started if started is not None else 0.0
        request_id = g.get('request_id')
        if request_id:
            response.headers['X-Request-ID'] = request_id

        endpoint = request.url_rule.rule if request.url_rule is not None else 'unmatched'
        observe_request(endpoint, request.method, response.status_code, latency)
        current_app.logger.info(
            f"Request {request_id} {request.method} {request.path} -> {response.status_code} "
            f"in {latency * 1000:.1f}ms from {client_ip()}"
        )
        return response

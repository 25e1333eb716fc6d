"""
Main Routes

FLOW OVERVIEW
- /health [GET]
  • JSON health check with database ping.
- /metrics [GET]
  • Prometheus text exposition (exempt from rate limiting).
- /api/status [GET]
  • Service name, version and environment.
"""

from datetime import datetime
from flask import Blueprint, Response, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from ..models import db
from ..extensions import limiter
from ..utils.prom_metrics import metrics_latest, CONTENT_TYPE_LATEST

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
@limiter.exempt
def health():
    """Health check endpoint"""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check database ping failed: {e}")
        db.session.rollback()
        database = 'unavailable'

    status = 'healthy' if database == 'ok' else 'degraded'
    return jsonify({
        'status': status,
        'database': database,
        'timestamp': datetime.utcnow().isoformat()
    }), 200 if status == 'healthy' else 503


@main_bp.route('/metrics')
@limiter.exempt
def metrics():
    """Prometheus metrics endpoint"""
    return Response(metrics_latest(), content_type=CONTENT_TYPE_LATEST)


@main_bp.route('/api/status')
def api_status():
    """API status endpoint"""
    from .. import __version__
    return jsonify({
        'status': 'operational',
        'service': 'laptrack',
        'version': __version__,
        'environment': current_app.config.get('ENV_NAME', 'development')
    })

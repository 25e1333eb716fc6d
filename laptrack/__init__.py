"""
LapTrack Application Package

FLOW OVERVIEW
- create_app(test_config=None)
  • Build Flask app, apply config (test or env-based), configure logging.
  • Init extensions: DB, rate limiter, CORS.
  • Register blueprints: main (/), auth (/api/auth), laptops, employees,
    assignments, maintenance, issues (/api/...).
  • Register request logging/metrics hooks, JSON error handlers and CLI commands.
"""

from flask import Flask
from .models import db
from .extensions import limiter, cors
from .routes import (
    main_bp, auth_bp, laptops_bp, employees_bp,
    assignments_bp, maintenance_bp, issues_bp
)
from .config import Config

__version__ = '1.0.0'


def create_app(test_config=None):
    """Application factory pattern for production deployment"""
    app = Flask(__name__)

    # Configuration
    if test_config:
        # Use test configuration if provided
        app.config.update(test_config)
    else:
        # Use environment-based configuration
        app.config.from_object(Config())

    from .utils.request_logger import configure_logging, register_request_hooks
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    cors.init_app(app, resources={r'/api/*': {'origins': app.config.get('CORS_ORIGINS', '*')}},
                  expose_headers=['X-Request-ID'])

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(laptops_bp, url_prefix='/api/laptops')
    app.register_blueprint(employees_bp, url_prefix='/api/employees')
    app.register_blueprint(assignments_bp, url_prefix='/api/assignments')
    app.register_blueprint(maintenance_bp, url_prefix='/api/maintenance')
    app.register_blueprint(issues_bp, url_prefix='/api/issues')

    register_request_hooks(app)

    # Register error handlers
    from .utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    from .cli import register_commands
    register_commands(app)

    app.logger.info("LapTrack application initialized")
    return app

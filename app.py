#!/usr/bin/env python3
"""
LapTrack application entry point.

This module creates the Flask application via `create_app` and creates any
missing tables. When executed directly, it runs the
development server on PORT. In production, a WSGI server should import `app`
from this module (e.g. `gunicorn app:app`).

Environment variables of interest:
- FLASK_ENV: selects config.env / config.prod.env; 'testing' skips dotenv files.
- DATABASE_URL, JWT_SECRET, REFRESH_TOKEN_SECRET, PORT: consumed by `Config`.
"""

import os
import logging
from laptrack import create_app
from laptrack.models import db

app = create_app()
logger = logging.getLogger('laptrack.run')

# create_all only adds missing tables
with app.app_context():
    db.create_all()

if __name__ == '__main__':
    debug_mode = os.getenv('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    host = os.getenv('HOST', '127.0.0.1')
    port = app.config.get('PORT', 5000)
    if debug_mode:
        logger.warning("Debug mode enabled - do not use in production")
    logger.info(f"Starting LapTrack server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port)

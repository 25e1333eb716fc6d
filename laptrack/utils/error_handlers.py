"""
Error Handlers

FLOW OVERVIEW
- APIError and subclasses are raised from routes and helpers.
- register_error_handlers(app) renders APIError, werkzeug HTTP errors and
  unexpected exceptions as one JSON shape:
    {"success": false, "error": <code>, "message": <text>, "errors": {...}}
"""

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class APIError(Exception):
    """Application error carrying an HTTP status and optional field errors"""

    status_code = 400
    error_code = 'BAD_REQUEST'

    def __init__(self, message, status_code=None, errors=None, error_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.errors = errors


class ValidationError(APIError):
    status_code = 400
    error_code = 'VALIDATION_ERROR'


class AuthenticationError(APIError):
    status_code = 401
    error_code = 'UNAUTHORIZED'


class PermissionDenied(APIError):
    status_code = 403
    error_code = 'FORBIDDEN'


class NotFoundError(APIError):
    status_code = 404
    error_code = 'NOT_FOUND'


class ConflictError(APIError):
    status_code = 409
    error_code = 'CONFLICT'


HTTP_ERROR_CODES = {
    400: 'BAD_REQUEST',
    401: 'UNAUTHORIZED',
    403: 'FORBIDDEN',
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
    409: 'CONFLICT',
    413: 'PAYLOAD_TOO_LARGE',
    429: 'RATE_LIMITED',
}


def error_response(message, status_code, error_code=None, errors=None):
    """Build the JSON error body used by every handler"""
    body = {
        'success': False,
        'error': error_code or HTTP_ERROR_CODES.get(status_code, 'ERROR'),
        'message': message,
    }
    if errors:
        body['errors'] = errors
    return jsonify(body), status_code


def register_error_handlers(app):
    """Register error handlers with the Flask app"""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        from ..models import db
        # discard pending changes from the failed request
        db.session.rollback()
        if error.status_code >= 500:
            current_app.logger.error(f"API error: {error.message}")
        return error_response(error.message, error.status_code, error.error_code, error.errors)

    @app.errorhandler(429)
    def rate_limited(error):
        current_app.logger.warning(f"Rate limit exceeded: {error.description}")
        return error_response(f"Too many requests: {error.description}", 429)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        from ..models import db
        db.session.rollback()
        current_app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return error_response('Something went wrong on our end. Please try again later.', 500,
                              'INTERNAL_ERROR')

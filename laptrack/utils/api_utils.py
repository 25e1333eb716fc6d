"""
API Utilities Module

FLOW OVERVIEW
- APIRequestValidator
  • get_json_body → parse the request body and require a JSON object.
  • validate_model_payload → run validate_payload with a model's FIELDS.
- Query helpers
  • get_pagination_args → page/per_page from the query string, bounded by config.
  • apply_filters → equality filters for whitelisted columns.
  • paginate → run a query and format the list envelope.
- Persistence helpers
  • commit_or_conflict → commit, translating IntegrityError into 409.
  • get_or_404 → primary-key lookup raising NotFoundError.

Shared by all resource blueprints to avoid code duplication.
"""

import logging
from typing import Any, Dict, Optional, Tuple
from flask import request, current_app
from sqlalchemy.exc import IntegrityError

from ..models import db
from .error_handlers import ValidationError, NotFoundError, ConflictError
from .validators import InputValidator, MAX_DB_INTEGER, validate_payload


class APIRequestValidator:
    """Handles common request validation logic."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def get_json_body(self) -> Dict[str, Any]:
        """
        Parse the JSON request body.

        Returns:
            The decoded JSON object

        Raises:
            ValidationError: body missing, malformed or not an object
        """
        data = request.get_json(silent=True)
        if data is None:
            self.logger.warning(f"Invalid or missing JSON from {request.remote_addr}")
            raise ValidationError('Invalid request format. JSON object required.',
                                  error_code='INVALID_JSON')

        if not isinstance(data, dict):
            self.logger.warning(f"Invalid data type from {request.remote_addr}: {type(data).__name__}")
            raise ValidationError('Request data must be a JSON object.', error_code='INVALID_JSON')

        return data

    def validate_model_payload(self, model, partial: bool = False) -> Dict[str, Any]:
        """Validate the request body against `model.FIELDS` and return cleaned values."""
        data = self.get_json_body()
        result = validate_payload(data, model.FIELDS, partial=partial)
        if not result.is_valid:
            raise ValidationError(result.error_message, errors=result.errors)
        return result.sanitized_value


request_validator = APIRequestValidator()


def get_pagination_args() -> Tuple[int, int]:
    """Read page and per_page from the query string."""
    default_size = current_app.config.get('DEFAULT_PAGE_SIZE', 20)
    max_size = current_app.config.get('MAX_PAGE_SIZE', 100)

    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', default_size, type=int)

    if page is None or page < 1:
        raise ValidationError('page must be a positive integer')
    if per_page is None or per_page < 1:
        raise ValidationError('per_page must be a positive integer')
    per_page = min(per_page, max_size)
    if (page - 1) * per_page > MAX_DB_INTEGER:
        raise ValidationError('page is out of range')
    return page, per_page


def apply_filters(query, model, fields=None):
    """Apply `?column=value` equality filters for the model's whitelisted columns."""
    for name in fields if fields is not None else model.FILTERS:
        value = request.args.get(name)
        if value is None or value == '':
            continue
        if name.endswith('_id'):
            result = InputValidator.parse_integer(value)
            if not result.is_valid:
                raise ValidationError(f'{name} must be an integer id')
            value = result.sanitized_value
        query = query.filter(getattr(model, name) == value)
    return query


def paginate(query) -> Dict[str, Any]:
    """Paginate a query and return the list envelope."""
    page, per_page = get_pagination_args()
    pagination = query.paginate(page=page, per_page=per_page, error_out=False)
    return {
        'items': [item.to_dict() for item in pagination.items],
        'total': pagination.total,
        'page': pagination.page,
        'per_page': pagination.per_page,
        'pages': pagination.pages,
    }


def get_or_404(model, record_id, label: Optional[str] = None):
    """Fetch a record by primary key or raise NotFoundError."""
    # ids beyond the column range cannot exist; the driver would overflow
    record = db.session.get(model, record_id) if 0 < record_id <= MAX_DB_INTEGER else None
    if record is None:
        raise NotFoundError(f'{label or model.__name__} not found')
    return record


def require_reference(model, record_id, field_name: str):
    """Resolve a foreign key from a request body; unknown ids are a 400."""
    record = db.session.get(model, record_id) if 0 < record_id <= MAX_DB_INTEGER else None
    if record is None:
        raise ValidationError('Validation failed',
                              errors={field_name: f'{model.__name__} {record_id} does not exist'})
    return record


def commit_or_conflict(message: str = 'Record conflicts with an existing record'):
    """Commit the session; uniqueness violations become a 409."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logging.getLogger(__name__).info(f"Integrity error on commit: {e.orig}")
        raise ConflictError(message)

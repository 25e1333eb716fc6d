"""
Input Validation Utilities

FLOW OVERVIEW
- validate_email(email)
  • RFC-like syntax checks; returns sanitized lowercased value.
- validate_password_strength(password)
  • Enforce length and character variety.
- sanitize_input(input, max_length)
  • Trim, bound length and remove null bytes.
- validate_payload(data, fields, partial=False)
  • Check a JSON object against a tuple of `Field` rules (required, type,
    choices, max length, minimum). Returns a ValidationResult whose
    `sanitized_value` holds only known, coerced fields and whose `errors`
    maps field name -> message.
"""

import math
import re
from datetime import date, datetime
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# ids and integers are stored in signed 64-bit columns
MAX_DB_INTEGER = 2 ** 63 - 1


@dataclass
class ValidationResult:
    """Result of validation operation"""
    is_valid: bool
    error_message: Optional[str] = None
    sanitized_value: Any = None
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Field:
    """Declarative description of one writable model field."""
    name: str
    type: str = 'string'
    required: bool = False
    choices: Optional[Tuple[str, ...]] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None


class InputValidator:
    """Input validation helpers shared by the auth and resource routes"""

    EMAIL_PATTERN = re.compile(
        r'^[a-zA-Z0-9.!#$%&\'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$'
    )

    DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

    FIELD_TYPES = ('string', 'text', 'integer', 'number', 'date', 'email', 'reference')

    @classmethod
    def validate_email(cls, email: str) -> ValidationResult:
        """
        Validate an email address

        Args:
            email: Email address to validate

        Returns:
            ValidationResult with validation status and lowercased value
        """
        if not email or not isinstance(email, str):
            return ValidationResult(False, "Email must be a non-empty string")

        email = email.strip()
        if email == "":
            return ValidationResult(False, "Email cannot be empty")

        if len(email) > 254:
            return ValidationResult(False, "Email address too long (max 254 characters)")

        if not cls.EMAIL_PATTERN.match(email):
            return ValidationResult(False, "Invalid email format")

        local_part, domain = email.split('@')
        if len(local_part) > 64:
            return ValidationResult(False, "Email local part too long (max 64 characters)")

        if local_part.startswith('.') or local_part.endswith('.') or '..' in local_part:
            return ValidationResult(False, "Invalid email format")

        if '..' in domain:
            return ValidationResult(False, "Domain cannot contain consecutive dots")

        return ValidationResult(True, sanitized_value=email.lower())

    @classmethod
    def validate_password_strength(cls, password: str) -> ValidationResult:
        """Require 8+ characters with upper case, lower case and a digit."""
        if not password or not isinstance(password, str):
            return ValidationResult(False, "Password is required")
        if len(password) < 8:
            return ValidationResult(False, "Password must be at least 8 characters long")
        if len(password) > 128:
            return ValidationResult(False, "Password too long (max 128 characters)")
        if not re.search(r'[A-Z]', password):
            return ValidationResult(False, "Password must contain at least one uppercase letter")
        if not re.search(r'[a-z]', password):
            return ValidationResult(False, "Password must contain at least one lowercase letter")
        if not re.search(r'\d', password):
            return ValidationResult(False, "Password must contain at least one number")
        return ValidationResult(True, sanitized_value=password)

    @classmethod
    def sanitize_input(cls, input_str: str, max_length: Optional[int] = None) -> ValidationResult:
        """
        Sanitize a free-text value

        Args:
            input_str: Input string to sanitize
            max_length: Maximum allowed length

        Returns:
            ValidationResult with sanitized value
        """
        if not isinstance(input_str, str):
            return ValidationResult(False, "Input must be a string")

        sanitized = input_str.replace('\x00', '').strip()

        if max_length is not None and len(sanitized) > max_length:
            return ValidationResult(False, f"Must be at most {max_length} characters")

        return ValidationResult(True, sanitized_value=sanitized)

    @classmethod
    def parse_date(cls, value: Any) -> ValidationResult:
        """Accept date objects or ISO `YYYY-MM-DD` strings."""
        if isinstance(value, datetime):
            return ValidationResult(True, sanitized_value=value.date())
        if isinstance(value, date):
            return ValidationResult(True, sanitized_value=value)
        if not isinstance(value, str) or not cls.DATE_PATTERN.fullmatch(value.strip()):
            return ValidationResult(False, "Must be a date in YYYY-MM-DD format")
        try:
            return ValidationResult(True, sanitized_value=date.fromisoformat(value.strip()))
        except ValueError:
            return ValidationResult(False, "Must be a date in YYYY-MM-DD format")

    @classmethod
    def parse_integer(cls, value: Any) -> ValidationResult:
        """Accept ints or ASCII decimal strings that fit a 64-bit column."""
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool):
            return ValidationResult(False, "Must be an integer")
        if isinstance(value, str):
            value = value.strip()
            if not (value.isascii() and value.isdigit()):
                return ValidationResult(False, "Must be an integer")
            value = int(value)
        if not isinstance(value, int):
            return ValidationResult(False, "Must be an integer")
        if abs(value) > MAX_DB_INTEGER:
            return ValidationResult(False, "Integer out of range")
        return ValidationResult(True, sanitized_value=value)

    @classmethod
    def validate_field(cls, rule: Field, value: Any) -> ValidationResult:
        """Coerce and check a single non-empty value against its rule."""
        if rule.type in ('string', 'text'):
            result = cls.sanitize_input(value, rule.max_length)
            if not result.is_valid:
                return result
            if rule.choices and result.sanitized_value not in rule.choices:
                return ValidationResult(False, f"Must be one of: {', '.join(rule.choices)}")
            return result

        if rule.type == 'email':
            result = cls.validate_email(value)
            if result.is_valid and rule.max_length and len(result.sanitized_value) > rule.max_length:
                return ValidationResult(False, f"Must be at most {rule.max_length} characters")
            return result

        if rule.type == 'date':
            return cls.parse_date(value)

        if rule.type in ('integer', 'reference'):
            result = cls.parse_integer(value)
            if not result.is_valid:
                return result
            value = result.sanitized_value
            if rule.type == 'reference' and value < 1:
                return ValidationResult(False, "Must be a valid id")
            if rule.min_value is not None and value < rule.min_value:
                return ValidationResult(False, f"Must be at least {rule.min_value}")
            return result

        if rule.type == 'number':
            if isinstance(value, bool):
                return ValidationResult(False, "Must be a number")
            if isinstance(value, str):
                try:
                    value = float(value)
                except ValueError:
                    return ValidationResult(False, "Must be a number")
            if not isinstance(value, (int, float)):
                return ValidationResult(False, "Must be a number")
            try:
                value = float(value)
            except OverflowError:
                return ValidationResult(False, "Number out of range")
            # NaN would slip past min_value and is stored as NULL
            if not math.isfinite(value):
                return ValidationResult(False, "Must be a finite number")
            if rule.min_value is not None and value < rule.min_value:
                return ValidationResult(False, f"Must be at least {rule.min_value}")
            return ValidationResult(True, sanitized_value=value)

        raise ValueError(f"Unknown field type: {rule.type}")


def validate_email(email: str) -> ValidationResult:
    """Validate email address"""
    return InputValidator.validate_email(email)


def validate_password_strength(password: str) -> ValidationResult:
    """Validate password strength"""
    return InputValidator.validate_password_strength(password)


def sanitize_input(input_str: str, max_length: Optional[int] = None) -> ValidationResult:
    """Sanitize input string"""
    return InputValidator.sanitize_input(input_str, max_length)


def validate_payload(data: Dict[str, Any], fields: Tuple[Field, ...], partial: bool = False) -> ValidationResult:
    """
    Validate a request payload against a set of field rules.

    Unknown keys are dropped. With `partial=True` only the keys present in
    `data` are checked, which is what updates need.

    Args:
        data: Parsed JSON object
        fields: Field rules for the target model
        partial: Skip required checks for absent fields

    Returns:
        ValidationResult; `sanitized_value` is a dict of cleaned values
    """
    errors: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    for rule in fields:
        present = rule.name in data
        value = data.get(rule.name)

        if value is None or (isinstance(value, str) and value.strip() == ''):
            if rule.required and (present or not partial):
                errors[rule.name] = "This field is required"
            elif present and not rule.choices:
                # explicit null clears an optional field; enums keep their default
                cleaned[rule.name] = None
            continue

        result = InputValidator.validate_field(rule, value)
        if result.is_valid:
            cleaned[rule.name] = result.sanitized_value
        else:
            errors[rule.name] = result.error_message

    if errors:
        return ValidationResult(False, "Validation failed", errors=errors)
    return ValidationResult(True, sanitized_value=cleaned)

"""
Utilities Package

This package contains utility functions and helper modules:
auth_utils, validators, api_utils, error_handlers, prom_metrics, request_logger.
"""

"""
Utils Module for Training EMR

This module contains utility functions and helpers used throughout the application.
Includes identifiers, date formatting, validation and configuration management.

Modules:
- helpers: Common utility functions and data formatting helpers
- validators: Input validation for sign-up and chart fields
- config: Configuration management and logging setup
"""

from .helpers import (
    generate_id, generate_mrn, now_iso, today_iso, parse_iso_date,
    format_date, format_phone_number, calculate_age, display_value,
    format_vitals
)

from .validators import (
    normalize_email, is_valid_email, validate_password, validate_password_match,
    validate_required_fields
)

from .config import (
    get_app_config, get_auth_config, get_seed_config,
    is_development, get_log_level, load_app_config
)

__all__ = [
    # Helpers
    'generate_id', 'generate_mrn', 'now_iso', 'today_iso', 'parse_iso_date',
    'format_date', 'format_phone_number', 'calculate_age', 'display_value',
    'format_vitals',

    # Validators
    'normalize_email', 'is_valid_email', 'validate_password', 'validate_password_match',
    'validate_required_fields',

    # Config
    'get_app_config', 'get_auth_config', 'get_seed_config',
    'is_development', 'get_log_level', 'load_app_config'
]

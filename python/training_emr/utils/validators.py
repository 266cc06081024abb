"""
Input Validation Utilities for Training EMR

Validation functions for sign-up input and patient chart fields.
Validators return ``(is_valid, error_message)`` tuples or an error map;
raising is left to the services that own the workflow.
"""

import re
from typing import Dict, Iterable, Mapping, Any, Tuple
import logging

logger = logging.getLogger(__name__)

REQUIRED_PATIENT_FIELDS = ('firstName', 'lastName', 'mrn', 'dob')
REQUIRED_MESSAGE = "Required"

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

def normalize_email(email: str) -> str:
    """Lookup form of an email: trimmed and lower-cased"""
    return (email or "").strip().lower()

def is_valid_email(email: str) -> bool:
    """
    Validate email address format

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(normalize_email(email)))

def validate_password(password: str, min_length: int = 8) -> Tuple[bool, str]:
    """
    Validate password strength

    Args:
        password: Candidate password
        min_length: Minimum number of characters

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(password or "") < min_length:
        return False, f"Password must be at least {min_length} characters."
    return True, ""

def validate_password_match(password: str, confirm_password: str) -> Tuple[bool, str]:
    if password != confirm_password:
        return False, "Passwords do not match."
    return True, ""

def validate_required_fields(record: Mapping[str, Any],
                             fields: Iterable[str] = REQUIRED_PATIENT_FIELDS) -> Dict[str, str]:
    """
    Check that required chart fields are filled in

    Args:
        record: Patient form values
        fields: Field names that must be non-blank

    Returns:
        Map of field name to error message; empty when the record is valid
    """
    errors = {}
    for field in fields:
        value = record.get(field)
        if value is None or not str(value).strip():
            errors[field] = REQUIRED_MESSAGE
    return errors

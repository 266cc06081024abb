"""
Helper Utilities for Training EMR

Common utility functions for identifiers, timestamps, date handling
and display formatting of patient chart values.
"""

import pandas as pd
from datetime import datetime, date, timezone
from typing import Iterable, Optional, Union
import random
import re
import uuid
import logging

logger = logging.getLogger(__name__)

EMPTY_DISPLAY = "—"
MRN_PREFIX = "MRN-"
MRN_DIGITS = 8

def generate_id() -> str:
    """Random record identifier (32 hex characters)"""
    return uuid.uuid4().hex

def generate_mrn(existing: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None) -> str:
    """
    Generate a display Medical Record Number

    Args:
        existing: MRNs already in use by the collection; a new MRN never repeats one
        rng: Optional random source for reproducible output

    Returns:
        MRN string such as ``MRN-04718233``
    """
    rng = rng or random.SystemRandom()
    taken = set(existing or [])
    while True:
        mrn = MRN_PREFIX + "".join(rng.choice("0123456789") for _ in range(MRN_DIGITS))
        if mrn not in taken:
            return mrn

def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2025-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def today_iso() -> str:
    return date.today().isoformat()

def parse_iso_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string into a date

    Returns:
        date, or None for blank or unparseable input
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        logger.debug(f"Unparseable date value: {value!r}")
        return None

def format_date(date_value: Union[datetime, date, str, None], format_str: str = "%b %d, %Y") -> str:
    """
    Format date values consistently

    Args:
        date_value: Date to format
        format_str: Format string

    Returns:
        Formatted date string, or an em placeholder for empty values
    """
    try:
        if date_value is None or date_value == "" or pd.isna(date_value):
            return EMPTY_DISPLAY

        if isinstance(date_value, str):
            try:
                date_value = pd.to_datetime(date_value)
            except (ValueError, TypeError):
                return date_value  # Return original if can't parse

        if isinstance(date_value, (datetime, date)):
            return date_value.strftime(format_str)

        return str(date_value)

    except Exception as e:
        logger.error(f"Error formatting date: {e}")
        return "Invalid Date"

def format_phone_number(phone: str) -> str:
    """
    Format phone numbers consistently

    Args:
        phone: Phone number string

    Returns:
        Formatted phone number
    """
    phone = str(phone or "").strip()
    if not phone:
        return EMPTY_DISPLAY

    digits = re.sub(r'\D', '', phone)

    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    elif len(digits) == 11 and digits[0] == '1':
        return f"({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return phone

def calculate_age(birth_date: Union[datetime, date, str, None],
                  reference_date: Union[datetime, date, None] = None) -> Optional[int]:
    """
    Calculate age from birth date

    Args:
        birth_date: Date of birth
        reference_date: Reference date (default: today)

    Returns:
        Age in years, or None when the birth date is missing
    """
    birth = parse_iso_date(birth_date)
    if birth is None:
        return None

    if reference_date is None:
        reference_date = date.today()
    elif isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    age = reference_date.year - birth.year

    # Adjust if birthday hasn't occurred this year
    if (reference_date.month, reference_date.day) < (birth.month, birth.day):
        age -= 1

    return age

def display_value(value, empty: str = EMPTY_DISPLAY) -> str:
    """Show a chart value or a placeholder when blank"""
    if value is None:
        return empty
    text = str(value).strip()
    return text if text else empty

def format_vitals(vitals: Optional[dict]) -> str:
    """One-line vitals summary: HR 74 • BP 118/78 • Temp 98.6"""
    vitals = vitals or {}
    return (
        f"HR {display_value(vitals.get('hr'))} • "
        f"BP {display_value(vitals.get('bp'))} • "
        f"Temp {display_value(vitals.get('temp'))}"
    )

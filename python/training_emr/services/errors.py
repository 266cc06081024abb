"""
Error types raised by the Training EMR services.

Every error carries a human-readable ``message`` that the forms show inline.
"""

from typing import Dict, Iterable, Optional


class EMRError(Exception):
    """Base class for recoverable, user-facing errors"""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(EMRError):
    """Sign-in or sign-up rejected"""


class InvalidCredentials(AuthError):
    default_message = "Invalid email or password."


class InvalidEmail(AuthError):
    default_message = "Enter a valid email address."


class EmailTaken(AuthError):
    default_message = "An account with this email already exists."


class WeakPassword(AuthError):
    default_message = "Password must be at least 8 characters."


class PasswordMismatch(AuthError):
    default_message = "Passwords do not match."


class RequiredFieldMissing(EMRError):
    """One or more required chart fields are blank"""

    def __init__(self, fields: Iterable[str], errors: Optional[Dict[str, str]] = None):
        self.fields = list(fields)
        self.errors = dict(errors or {field: "Required" for field in self.fields})
        super().__init__(f"Required field(s) missing: {', '.join(self.fields)}")

    @property
    def field(self) -> str:
        """First missing field"""
        return self.fields[0] if self.fields else ""


class PatientNotFound(EMRError):
    def __init__(self, patient_id: str):
        self.patient_id = patient_id
        super().__init__(f"Patient {patient_id} was not found.")

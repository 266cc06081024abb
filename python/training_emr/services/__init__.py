"""
Services Module for Training EMR

This module contains the core business logic for the application: the local
JSON store, account and session management, the patient list controller and
the patient editor.
"""

from .errors import (
    EMRError, AuthError, InvalidCredentials, InvalidEmail, EmailTaken, WeakPassword,
    PasswordMismatch, RequiredFieldMissing, PatientNotFound
)
from .local_store import LocalStore
from .session_manager import Session, SessionManager
from .patient_list import PatientListController, filter_patients, sort_patients, next_sort
from .patient_editor import PatientEditor

__all__ = [
    'EMRError',
    'AuthError',
    'InvalidCredentials',
    'InvalidEmail',
    'EmailTaken',
    'WeakPassword',
    'PasswordMismatch',
    'RequiredFieldMissing',
    'PatientNotFound',
    'LocalStore',
    'Session',
    'SessionManager',
    'PatientListController',
    'filter_patients',
    'sort_patients',
    'next_sort',
    'PatientEditor'
]

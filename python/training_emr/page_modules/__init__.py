"""
Pages Module for Training EMR

Pages:
- auth: Sign-in and sign-up
- emr: Patient table, chart summary and editor for the signed-in user
"""

from . import auth, emr

__all__ = ['auth', 'emr']

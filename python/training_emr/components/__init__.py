"""
Components Module for Training EMR

This module contains reusable UI components shared by the pages.

Components:
- auth_forms: Sign-in and sign-up forms
- patient_cards: Patient table rows, delete confirmation and chart summary
- patient_editor_form: New / edit patient form
- search_widgets: Search box, sortable headers and CSV export
"""

from .auth_forms import render_sign_in_form, render_sign_up_form
from .patient_cards import (
    render_patient_row, render_patient_list, render_delete_confirmation, render_patient_summary
)
from .patient_editor_form import render_patient_editor
from .search_widgets import (
    render_search_bar, render_sort_headers, render_results_summary, render_export_button
)

__all__ = [
    'render_sign_in_form',
    'render_sign_up_form',
    'render_patient_row',
    'render_patient_list',
    'render_delete_confirmation',
    'render_patient_summary',
    'render_patient_editor',
    'render_search_bar',
    'render_sort_headers',
    'render_results_summary',
    'render_export_button'
]

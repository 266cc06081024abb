"""
Patient Cards Component for Training EMR

Reusable patient display components: table rows with actions,
the delete confirmation prompt, and the chart summary panel.
"""

import streamlit as st
from typing import Dict, Any, Optional, List
import logging

from training_emr.utils.helpers import calculate_age, display_value, format_date, format_phone_number, format_vitals

logger = logging.getLogger(__name__)

# Shared by the header and each row so the columns line up
ROW_WIDTHS: List[float] = [3, 2, 1.6, 1.2, 1.6, 0.9, 0.9, 1.1]

def render_patient_row(patient: Dict[str, Any], key: str, is_active: bool = False) -> Optional[str]:
    """
    Render one table row with View / Edit / Delete actions

    Args:
        patient: Patient record
        key: Unique key for the component
        is_active: Whether this chart is the selected one

    Returns:
        'view', 'edit', 'delete', or None when no action was clicked
    """
    action = None
    try:
        cols = st.columns(ROW_WIDTHS, vertical_alignment="center")

        with cols[0]:
            marker = "▶ " if is_active else ""
            st.markdown(f"{marker}**{display_value(patient.get('lastName'))}, {display_value(patient.get('firstName'))}**")
            st.caption(f"Allergies: {display_value(patient.get('allergies'), 'None')}")

        with cols[1]:
            st.code(display_value(patient.get('mrn')), language=None)

        with cols[2]:
            st.text(format_date(patient.get('dob')))

        with cols[3]:
            st.text(display_value(patient.get('sex')))

        with cols[4]:
            st.text(format_date(patient.get('lastVisit')))

        with cols[5]:
            if st.button("View", key=f"view_{key}"):
                action = 'view'

        with cols[6]:
            if st.button("Edit", key=f"edit_{key}"):
                action = 'edit'

        with cols[7]:
            if st.button("Delete", key=f"delete_{key}", type="primary"):
                action = 'delete'

    except Exception as e:
        logger.error(f"Error rendering patient row: {e}")
        st.error(f"❌ Error rendering patient {patient.get('id', 'Unknown')}: {str(e)}")

    return action

def render_patient_list(patients: List[Dict[str, Any]], active_id: Optional[str] = None) -> Optional[tuple]:
    """
    Render every row, or the empty state

    Returns:
        (action, patient_id) for the clicked row, or None
    """
    if not patients:
        st.info("No patients found.")
        return None

    clicked = None
    for patient in patients:
        action = render_patient_row(patient, key=patient['id'], is_active=(patient['id'] == active_id))
        if action:
            clicked = (action, patient['id'])
    return clicked

def render_delete_confirmation(patient: Dict[str, Any], key: str) -> Optional[bool]:
    """
    Ask before deleting a chart

    Returns:
        True to delete, False to cancel, None while undecided
    """
    name = f"{display_value(patient.get('firstName'))} {display_value(patient.get('lastName'))}"
    st.warning(f"Delete **{name}** ({display_value(patient.get('mrn'))})? This cannot be undone.")

    col1, col2, _ = st.columns([1, 1, 3])
    with col1:
        if st.button("Delete patient", key=f"confirm_delete_{key}", type="primary"):
            return True
    with col2:
        if st.button("Cancel", key=f"cancel_delete_{key}"):
            return False
    return None

def _info(label: str, value: str, mono: bool = False) -> None:
    st.caption(label.upper())
    if mono:
        st.markdown(f"`{value}`")
    else:
        st.markdown(value)

def render_patient_summary(patient: Optional[Dict[str, Any]]) -> None:
    """
    Render the chart summary for the selected patient

    Args:
        patient: Selected record, or None for the getting-started panel
    """
    if patient is None:
        st.subheader("Getting started")
        st.markdown(
            "- Select a patient from the table to view their chart.\n"
            "- Use **+ New patient** to add a new chart.\n"
            "- Everything is saved locally for your login only."
        )
        return

    try:
        st.subheader("Chart summary")

        age = calculate_age(patient.get('dob'))
        dob_text = format_date(patient.get('dob'))
        if age is not None:
            dob_text = f"{dob_text} ({age} y)"

        col1, col2 = st.columns(2)
        with col1:
            _info("Name", f"{patient.get('firstName', '')} {patient.get('lastName', '')}".strip())
            _info("DOB", dob_text)
            _info("Last Visit", format_date(patient.get('lastVisit')))
        with col2:
            _info("MRN", display_value(patient.get('mrn')), mono=True)
            _info("Sex", display_value(patient.get('sex')))
            _info("Phone", format_phone_number(patient.get('phone')))

        _info("Allergies", display_value(patient.get('allergies'), 'None'))
        _info("Medications", display_value(patient.get('medications'), 'None'))
        _info("Conditions", display_value(patient.get('conditions'), 'None'))
        _info("Vitals", format_vitals(patient.get('vitals')))
        _info("Notes", display_value(patient.get('notes'), '(no notes)'))

    except Exception as e:
        logger.error(f"Error rendering patient summary: {e}")
        st.error("Error displaying patient summary")

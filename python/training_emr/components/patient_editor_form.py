"""
Patient Editor Form Component for Training EMR

Renders a PatientEditor as a Streamlit form. Required-field errors from the
last save attempt are shown next to the field labels.
"""

import streamlit as st
from datetime import date
from typing import Any, Dict, Optional
import logging

from training_emr.services.patient_editor import PatientEditor
from training_emr.utils.helpers import parse_iso_date
from training_emr.utils.patient_records import SEX_OPTIONS

logger = logging.getLogger(__name__)

MIN_DATE = date(1900, 1, 1)
MAX_DATE = date(2100, 12, 31)

def _label(text: str, error: Optional[str] = None) -> str:
    return f"{text} :red[{error}]" if error else text

def _iso(value: Optional[date]) -> str:
    return value.isoformat() if value else ""

def render_patient_editor(editor: PatientEditor) -> Optional[str]:
    """
    Render the editor form and copy submitted values into the editor

    Args:
        editor: Editor state kept in session state between reruns

    Returns:
        'save' or 'cancel' when a form button was pressed, otherwise None
    """
    form = editor.form
    errors = editor.errors
    k = form['id']

    st.subheader(editor.title)

    with st.form(f"patient_editor_{k}"):
        col1, col2 = st.columns(2)

        with col1:
            first_name = st.text_input(_label("First name", errors.get('firstName')),
                                       value=form['firstName'], key=f"ed_firstName_{k}")
            mrn = st.text_input(_label("MRN", errors.get('mrn')), value=form['mrn'], key=f"ed_mrn_{k}")
            sex = st.selectbox("Sex", SEX_OPTIONS,
                               index=SEX_OPTIONS.index(form['sex']) if form['sex'] in SEX_OPTIONS else 0,
                               format_func=lambda v: v or "—", key=f"ed_sex_{k}")
            last_visit = st.date_input("Last visit", value=parse_iso_date(form['lastVisit']),
                                       min_value=MIN_DATE, max_value=MAX_DATE,
                                       format="YYYY-MM-DD", key=f"ed_lastVisit_{k}")
            bp = st.text_input("Blood pressure", value=form['vitals']['bp'],
                               placeholder="120/80", key=f"ed_bp_{k}")

        with col2:
            last_name = st.text_input(_label("Last name", errors.get('lastName')),
                                      value=form['lastName'], key=f"ed_lastName_{k}")
            dob = st.date_input(_label("Date of birth", errors.get('dob')), value=parse_iso_date(form['dob']),
                                min_value=MIN_DATE, max_value=MAX_DATE,
                                format="YYYY-MM-DD", key=f"ed_dob_{k}")
            phone = st.text_input("Phone", value=form['phone'], placeholder="(555) 123-4567", key=f"ed_phone_{k}")
            hr = st.text_input("Heart rate (bpm)", value=form['vitals']['hr'], key=f"ed_hr_{k}")
            temp = st.text_input("Temperature (°F)", value=form['vitals']['temp'], key=f"ed_temp_{k}")

        allergies = st.text_input("Allergies", value=form['allergies'],
                                  placeholder="Penicillin; Peanuts", key=f"ed_allergies_{k}")
        medications = st.text_input("Medications", value=form['medications'],
                                    placeholder="Metformin; Lisinopril", key=f"ed_medications_{k}")
        conditions = st.text_input("Conditions", value=form['conditions'],
                                   placeholder="Hypertension; Type 2 diabetes", key=f"ed_conditions_{k}")
        notes = st.text_area("Clinical notes", value=form['notes'], height=120,
                             placeholder="Chief complaint, HPI, assessment, plan…", key=f"ed_notes_{k}")

        save_col, cancel_col, _ = st.columns([1, 1, 4])
        with save_col:
            save = st.form_submit_button("Save", type="primary")
        with cancel_col:
            cancel = st.form_submit_button("Cancel")

    if cancel:
        return 'cancel'

    if save:
        values: Dict[str, Any] = {
            'firstName': first_name,
            'lastName': last_name,
            'mrn': mrn,
            'dob': _iso(dob),
            'sex': sex,
            'phone': phone,
            'lastVisit': _iso(last_visit),
            'allergies': allergies,
            'medications': medications,
            'conditions': conditions,
            'notes': notes,
            'vitals': {'hr': hr, 'bp': bp, 'temp': temp},
        }
        editor.update(values)
        return 'save'

    return None

"""
EMR Page for Training EMR

The signed-in workspace: searchable, sortable patient table with row actions,
chart summary, account panel, and the new / edit patient form.

The signed-in ``Session`` is passed in by the shell; this page never reads the
persisted session itself.
"""

import streamlit as st
from typing import Callable
import logging

from training_emr.components import patient_cards, patient_editor_form, search_widgets
from training_emr.services.errors import EMRError, RequiredFieldMissing
from training_emr.services.local_store import LocalStore
from training_emr.services.patient_editor import PatientEditor
from training_emr.services.patient_list import PatientListController, next_sort
from training_emr.services.session_manager import Session

logger = logging.getLogger(__name__)

STATE_DEFAULTS = {
    'search_query': "",
    'sort_key': 'lastName',
    'sort_dir': 'asc',
    'active_patient_id': None,
    'patient_editor': None,
    'pending_delete_id': None,
}

def reset_state() -> None:
    """Forget table, selection and editor state (used on sign-in and sign-out)"""
    for key in STATE_DEFAULTS:
        st.session_state.pop(key, None)

def _init_state() -> None:
    for key, value in STATE_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value

def _sync_selection(controller: PatientListController) -> None:
    st.session_state.active_patient_id = controller.active_id

def render(session: Session, store: LocalStore, on_logout: Callable[[], None],
           practice_batch_size: int = 5) -> None:
    """
    Render the EMR workspace

    Args:
        session: Signed-in user
        store: Local store holding the user's collection
        on_logout: Called when the user logs out
        practice_batch_size: Charts added per click of the practice-data button
    """
    _init_state()
    controller = PatientListController(store, session, active_id=st.session_state.active_patient_id)
    _sync_selection(controller)

    editor = st.session_state.patient_editor
    if editor is not None:
        _render_editor(editor, controller)
        return

    left, right = st.columns([1.2, 1], gap="large")

    with left:
        _render_patient_table(controller, on_logout, practice_batch_size)

    with right:
        with st.container(border=True):
            patient_cards.render_patient_summary(controller.active_patient())

        with st.container(border=True):
            st.subheader("Account")
            st.markdown(f"**{session.name}**")
            st.caption(session.email)
            if st.button("Log out", key="logout_account"):
                on_logout()

def _render_patient_table(controller: PatientListController, on_logout: Callable[[], None],
                          practice_batch_size: int) -> None:
    col1, col2, col3 = st.columns([4, 2, 1.4], vertical_alignment="center")
    with col1:
        query = search_widgets.render_search_bar()
    with col2:
        if st.button("+ New patient", key="new_patient", type="primary"):
            st.session_state.patient_editor = PatientEditor.for_new(controller)
            st.session_state.pending_delete_id = None
            st.rerun()
    with col3:
        if st.button("Log out", key="logout_toolbar"):
            on_logout()

    pending_id = st.session_state.pending_delete_id
    pending = controller.get(pending_id) if pending_id else None
    if pending is not None:
        decision = patient_cards.render_delete_confirmation(pending, key=pending_id)
        if decision is not None:
            if decision:
                try:
                    controller.delete(pending_id)
                except EMRError as e:
                    st.error(e.message)
            st.session_state.pending_delete_id = None
            _sync_selection(controller)
            st.rerun()

    clicked_header = search_widgets.render_sort_headers(st.session_state.sort_key, st.session_state.sort_dir)
    if clicked_header:
        st.session_state.sort_key, st.session_state.sort_dir = next_sort(
            st.session_state.sort_key, st.session_state.sort_dir, clicked_header)
        st.rerun()

    rows = controller.visible(query, st.session_state.sort_key, st.session_state.sort_dir)
    clicked = patient_cards.render_patient_list(rows, active_id=controller.active_id)
    if clicked:
        action, patient_id = clicked
        if action == 'view':
            controller.select(patient_id)
            _sync_selection(controller)
        elif action == 'edit':
            st.session_state.patient_editor = PatientEditor.for_edit(controller.get(patient_id))
        elif action == 'delete':
            st.session_state.pending_delete_id = patient_id
        st.rerun()

    st.divider()
    search_widgets.render_results_summary(len(rows), len(controller.patients))

    export_col, practice_col = st.columns(2)
    with export_col:
        search_widgets.render_export_button(controller.to_dataframe(rows))
    with practice_col:
        if st.button(f"🧪 Add {practice_batch_size} practice patients", key="add_practice"):
            controller.add_practice_patients(practice_batch_size)
            st.toast(f"Added {practice_batch_size} practice patients")
            st.rerun()

def _render_editor(editor: PatientEditor, controller: PatientListController) -> None:
    with st.container(border=True):
        action = patient_editor_form.render_patient_editor(editor)

    if action == 'cancel':
        st.session_state.patient_editor = None
        st.rerun()

    if action == 'save':
        try:
            editor.submit(controller)
        except RequiredFieldMissing as e:
            logger.debug(f"Editor save blocked: {e.fields}")
            st.rerun()
        except EMRError as e:
            st.error(e.message)
            return

        st.session_state.patient_editor = None
        _sync_selection(controller)
        st.rerun()

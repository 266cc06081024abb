"""
Search Widgets Component for Training EMR

Search box, sortable column headers and export controls for the patient table.
"""

import streamlit as st
import pandas as pd
from datetime import date
from typing import Optional
import logging

from training_emr.components.patient_cards import ROW_WIDTHS
from training_emr.utils.patient_records import SORTABLE_COLUMNS

logger = logging.getLogger(__name__)

def render_search_bar(key: str = "search_query") -> str:
    """
    Render the free-text patient search box

    Args:
        key: Session state key holding the query

    Returns:
        Current query text
    """
    return st.text_input(
        "Search patients",
        placeholder="Search by name, MRN, meds, conditions…",
        key=key,
        label_visibility="collapsed",
    )

def render_sort_headers(sort_key: str, sort_dir: str) -> Optional[str]:
    """
    Render clickable column headers with the active sort indicator

    Args:
        sort_key: Field currently sorted on
        sort_dir: 'asc' or 'desc'

    Returns:
        Field of the clicked header, or None
    """
    clicked = None
    cols = st.columns(ROW_WIDTHS)

    for col, (field, label) in zip(cols, SORTABLE_COLUMNS):
        with col:
            indicator = ""
            if field == sort_key:
                indicator = " ▲" if sort_dir == 'asc' else " ▼"
            if st.button(f"{label}{indicator}", key=f"sort_header_{field}", type="tertiary"):
                clicked = field

    with cols[len(SORTABLE_COLUMNS)]:
        st.markdown("**Actions**")

    return clicked

def render_results_summary(shown: int, total: int) -> None:
    if total == 0:
        st.caption("No patients in your collection yet")
    elif shown == total:
        st.caption(f"Showing all {total} patients")
    else:
        st.caption(f"Showing {shown} of {total} patients")

def render_export_button(results: pd.DataFrame, key: str = "export_csv") -> None:
    """
    Offer the visible rows as a CSV download

    Args:
        results: Table rows to export
        key: Unique key for the component
    """
    try:
        st.download_button(
            "📄 Export to CSV",
            data=results.to_csv(index=False).encode("utf-8"),
            file_name=f"patients_{date.today().isoformat()}.csv",
            mime="text/csv",
            key=key,
            disabled=results.empty,
        )
    except Exception as e:
        logger.error(f"Error rendering export button: {e}")
        st.error("Error preparing export")

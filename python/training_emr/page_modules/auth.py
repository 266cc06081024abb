"""
Auth Page for Training EMR

Sign-in / sign-up switcher shown while nobody is signed in.
"""

import streamlit as st
from typing import Callable
import logging

from training_emr.components import auth_forms
from training_emr.services.session_manager import Session, SessionManager

logger = logging.getLogger(__name__)

SIGN_IN = "signin"
SIGN_UP = "signup"

def render(session_manager: SessionManager, on_login: Callable[[Session], None],
           demo_email: str = "", demo_password: str = "") -> None:
    """
    Render the auth page

    Args:
        session_manager: Account service
        on_login: Called with the new session after a successful sign-in or sign-up
        demo_email: Demo account shown as a hint (omitted when blank)
        demo_password: Demo password shown with the hint
    """
    if 'auth_mode' not in st.session_state:
        st.session_state.auth_mode = SIGN_IN

    mode = st.session_state.auth_mode
    col1, col2 = st.columns(2, gap="large")

    with col1:
        with st.container(border=True):
            if mode == SIGN_IN:
                st.subheader("Welcome back")
                st.markdown("Sign in to access the training EMR. Use the demo credentials to explore quickly.")
                session = auth_forms.render_sign_in_form(session_manager)
            else:
                st.subheader("Create your classroom account")
                st.markdown("Sign up as a student to practice entering, updating, and reviewing patient charts.")
                session = auth_forms.render_sign_up_form(session_manager)

            if session is not None:
                on_login(session)
                return

            if mode == SIGN_IN:
                st.markdown("Don't have an account?")
                if st.button("Sign up", key="switch_to_signup"):
                    st.session_state.auth_mode = SIGN_UP
                    st.rerun()
            else:
                st.markdown("Already registered?")
                if st.button("Sign in", key="switch_to_signin"):
                    st.session_state.auth_mode = SIGN_IN
                    st.rerun()

            if demo_email:
                st.caption(f"Demo: `{demo_email}` / `{demo_password}`")

    with col2:
        with st.container(border=True):
            st.subheader("What's inside")
            st.markdown(
                "- Practice UI for the classroom (not for real clinical use)\n"
                "- Add, edit, and delete patient records; view chart summaries\n"
                "- Track demographics, allergies, meds, conditions, vitals, notes\n"
                "- Search, sort, and filter patients; export the list to CSV\n"
                "- Local-only storage so each student has their own sandbox"
            )

"""
Auth Forms Component for Training EMR

Sign-in and sign-up forms. Each form calls the session manager on submit and
shows rejected attempts inline; a successful attempt returns the new session.
"""

import streamlit as st
from typing import Optional
import logging

from training_emr.services.errors import AuthError
from training_emr.services.session_manager import Session, SessionManager

logger = logging.getLogger(__name__)

def render_sign_in_form(session_manager: SessionManager) -> Optional[Session]:
    """
    Render the sign-in form

    Args:
        session_manager: Account service

    Returns:
        Session on successful sign-in, otherwise None
    """
    with st.form("signin_form"):
        email = st.text_input("Email *", placeholder="you@classroom.edu", key="signin_email")
        password = st.text_input("Password *", type="password", placeholder="••••••••", key="signin_password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted:
        try:
            return session_manager.sign_in(email, password)
        except AuthError as e:
            st.error(e.message)
    return None

def render_sign_up_form(session_manager: SessionManager) -> Optional[Session]:
    """
    Render the sign-up form

    Args:
        session_manager: Account service

    Returns:
        Session for the new account, otherwise None
    """
    min_length = session_manager.min_password_length

    with st.form("signup_form"):
        name = st.text_input("Full name *", placeholder="Alex Student", key="signup_name")
        email = st.text_input("Email *", placeholder="you@classroom.edu", key="signup_email")
        password = st.text_input("Password *", type="password",
                                 placeholder=f"At least {min_length} characters", key="signup_password")
        confirm = st.text_input("Confirm password *", type="password",
                                placeholder="Re-enter password", key="signup_confirm")
        submitted = st.form_submit_button("Create account", type="primary")

    if submitted:
        try:
            return session_manager.sign_up(name, email, password, confirm)
        except AuthError as e:
            st.error(e.message)
    return None

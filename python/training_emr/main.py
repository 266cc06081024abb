"""
Training EMR - Main Application
Classroom sandbox for practicing patient chart entry

Entry point (``streamlit run python/training_emr/main.py``). It:
- Seeds the demo account on first run
- Shows sign-in / sign-up while nobody is signed in
- Hands the signed-in session to the EMR workspace
"""

import streamlit as st
from typing import Any, Dict
import logging

from training_emr.page_modules import auth, emr
from training_emr.services import LocalStore, Session, SessionManager
from training_emr.utils import config

logger = logging.getLogger(__name__)

# Configure the Streamlit page
st.set_page_config(
    page_title="Training EMR",
    page_icon="🩺",
    layout="wide",
    initial_sidebar_state="collapsed",
    menu_items={
        'Get Help': None,
        'Report a bug': None,
        'About': "Training EMR - classroom sandbox, no real PHI"
    }
)

def build_services(app_config: Dict[str, Any]) -> SessionManager:
    """Create the store and account service from configuration"""
    seed = app_config['seed']
    store = LocalStore(app_config['app']['data_dir'])
    return SessionManager(
        store,
        min_password_length=app_config['auth']['min_password_length'],
        starter_patients=seed['starter_patients'],
        demo_name=seed['demo_name'],
        demo_email=seed['demo_email'],
        demo_password=seed['demo_password'],
    )

def initialize_session_state(session_manager: SessionManager, app_config: Dict[str, Any]):
    """Initialize session state variables for the application"""
    if 'initialized' not in st.session_state:
        st.session_state.initialized = True

        if app_config['seed']['seed_demo']:
            session_manager.seed_demo_account()

        # Restore a session persisted before a reload
        st.session_state.emr_session = session_manager.get_active_session()

def render_header(app_config: Dict[str, Any]):
    """Render the application header"""
    col1, col2 = st.columns([3, 2], vertical_alignment="bottom")

    with col1:
        st.markdown(f"## 🩺 {app_config['app']['app_name']}")

    with col2:
        st.markdown(
            "<div style='text-align: right; color: #888; font-size: 13px;'>"
            "For classroom use only - no real PHI</div>",
            unsafe_allow_html=True
        )

def render_main_content(session_manager: SessionManager, app_config: Dict[str, Any]):
    """Route to the auth page or the EMR workspace based on session presence"""

    def on_login(session: Session):
        emr.reset_state()
        st.session_state.emr_session = session
        st.rerun()

    def on_logout():
        session_manager.sign_out()
        emr.reset_state()
        st.session_state.emr_session = None
        st.rerun()

    session = st.session_state.emr_session
    page = "emr" if session else "auth"

    try:
        if session is None:
            seed = app_config['seed']
            auth.render(
                session_manager,
                on_login,
                demo_email=seed['demo_email'] if seed['seed_demo'] else "",
                demo_password=seed['demo_password'],
            )
        else:
            emr.render(
                session,
                session_manager.store,
                on_logout,
                practice_batch_size=app_config['app']['practice_batch_size'],
            )

    except Exception as e:
        logger.error(f"Error rendering page '{page}': {str(e)}")
        st.error(f"Error rendering page '{page}': {str(e)}")
        st.markdown("Please try refreshing the page.")

        # Show error details in expander for debugging
        with st.expander("Error Details (for debugging)"):
            st.exception(e)

def main():
    """Main application entry point"""

    app_config = config.load_app_config()
    session_manager = build_services(app_config)

    initialize_session_state(session_manager, app_config)

    render_header(app_config)

    with st.container():
        render_main_content(session_manager, app_config)

if __name__ == "__main__":
    main()

"""
Club Informatique – inscription à la visite académique
Academic visit registration app
"""
import logging
import streamlit as st

from src.ui.registration_page import render_registration_page
from src.utils.config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


# Streamlit page config
st.set_page_config(
    page_title="Club Informatique - Inscriptions",
    page_icon="🎓",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def apply_custom_css():
    """Apply global styles."""
    st.markdown("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #f8fafc 0%, #eff6ff 50%, #f1f5f9 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header, [data-testid="stHeader"] {
            visibility: hidden;
            height: 0;
        }

        [data-testid="stAppViewContainer"] > .main .block-container {
            padding-top: 1.5rem;
        }

        .stButton > button {
            border-radius: 10px;
            font-weight: 600;
            transition: all 0.2s;
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(90deg, #2563eb 0%, #7c3aed 100%);
            color: white;
            border: none;
        }

        .stButton > button:disabled {
            opacity: 0.5;
            cursor: not-allowed;
        }
        </style>
    """, unsafe_allow_html=True)


def main():
    """Application entry point."""
    try:
        apply_custom_css()
        render_registration_page()
    except Exception as e:
        # Error boundary
        logger.exception("Unhandled exception while rendering page")
        st.error("Une erreur est survenue, veuillez recharger la page")

        with st.expander("🔍 Détails de l'erreur"):
            st.code(str(e))

        if st.button("🔄 Réinitialiser"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()

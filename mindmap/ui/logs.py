"""Logs section component for the Outline Mind Map application."""

import os

import streamlit as st

from mindmap.logging_setup import LOGS_DIR, create_new_log


def list_log_files(logs_dir=LOGS_DIR):
    """Session log file names, newest first."""
    if not os.path.exists(logs_dir):
        return []
    return sorted((f for f in os.listdir(logs_dir) if f.endswith('.log')), reverse=True)


def render_logs_section(logs_dir=LOGS_DIR):
    """
    Render the logs section in the sidebar.
    """
    with st.sidebar.expander("📊 Logs"):
        log_files = list_log_files(logs_dir)
        if not log_files:
            st.info("No log files found.")
            return

        current_log = log_files[0]
        st.caption(f"Current: {current_log}")

        if st.button("Create New Log"):
            new_log = create_new_log(logs_dir)
            st.success(f"Created new log file: {new_log}")
            st.rerun()

        selected_log = st.selectbox(
            "Select log file",
            options=log_files,
            format_func=lambda x: x.replace('mindmap_session_', '').replace('.log', '')
        )
        try:
            with open(os.path.join(logs_dir, selected_log), 'r') as f:
                log_content = f.read()
        except OSError as e:
            st.error(f"Error reading log file: {str(e)}")
            return

        if st.button("View Log"):
            st.text_area("Log Content", log_content, height=300)
        st.download_button(
            "💾 Download Log",
            log_content,
            file_name=selected_log,
            mime="text/plain",
            key="download_log"
        )

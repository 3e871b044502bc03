"""Outline mind map document engine with a Streamlit front end."""

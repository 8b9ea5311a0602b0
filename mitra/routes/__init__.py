"""Streamlit entrypoints."""

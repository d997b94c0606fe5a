"""
Sticker Studio - Streamlit front-end.

Usage:
    streamlit run studio_app/main.py
"""

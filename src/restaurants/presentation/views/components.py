import html

import streamlit as st

from src.config import AppConfig
from src.restaurants.domain.models import Restaurant

ACCENT = "#FF3D00"


def apply_styles():
    st.markdown(f"""
        <style>
            .block-container {{ padding-top: 2rem !important; max-width: 480px; }}
            .restaurant-name {{ font-size: 1.1rem; font-weight: 700; margin-bottom: 0.2rem; }}
            .restaurant-notes {{ font-size: 0.9rem; color: #555; }}
            .thumb-placeholder {{ width: 50px; height: 50px; border-radius: 8px; background: #ccc;
                                  display: flex; align-items: center; justify-content: center;
                                  font-size: 0.6rem; color: #333; }}
            div.stButton > button[kind="primary"] {{ background-color: {ACCENT}; border: none; }}
        </style>
    """, unsafe_allow_html=True)


def preview_notes(notes: str, limit: int = AppConfig.NOTES_PREVIEW_CHARS) -> str:
    """Roughly two lines of notes, like the row layout shows."""
    notes = " ".join(notes.split())
    if len(notes) <= limit:
        return notes
    return notes[:limit].rstrip() + "…"


def render_thumbnail(restaurant: Restaurant):
    if restaurant.thumbnail:
        st.image(restaurant.thumbnail, width=50)
    else:
        st.markdown('<div class="thumb-placeholder">No Image</div>', unsafe_allow_html=True)


def render_restaurant_text(restaurant: Restaurant):
    name = html.escape(restaurant.name)
    st.markdown(f'<div class="restaurant-name">{name}</div>', unsafe_allow_html=True)
    if restaurant.notes:
        notes = html.escape(preview_notes(restaurant.notes))
        st.markdown(
            f'<div class="restaurant-notes">{notes}</div>',
            unsafe_allow_html=True,
        )

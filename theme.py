"""Centralised colour scheme, layout tweaks and accessibility helpers."""
from __future__ import annotations

from typing import Dict

import streamlit as st


THEME_COLORS: Dict[str, str] = {
    "background": "#F6F8FB",
    "surface": "#FFFFFF",
    "surface_alt": "#E9EFF7",
    "primary": "#1F3A68",
    "primary_light": "#2F5597",
    "accent": "#2E86DE",
    "positive": "#2E7D4F",
    "caution": "#B27B16",
    "negative": "#B5504A",
    "neutral": "#CBD5E1",
    "text": "#1A1A1A",
    "text_subtle": "#5A6B7A",
    "chart_optimistic": "#2E7D4F",
    "chart_realistic": "#2E86DE",
    "chart_pessimistic": "#B5504A",
}

DARK_THEME_COLORS: Dict[str, str] = {
    "background": "#0B1424",
    "surface": "#13213A",
    "surface_alt": "#1B2C49",
    "primary": "#6AA6F0",
    "primary_light": "#8DBBF3",
    "accent": "#6AB2F2",
    "positive": "#5FAF93",
    "caution": "#E0B565",
    "negative": "#D06A6A",
    "neutral": "#3E4C63",
    "text": "#F1F4F9",
    "text_subtle": "#C6CFDB",
    "chart_optimistic": "#5FAF93",
    "chart_realistic": "#6AB2F2",
    "chart_pessimistic": "#D06A6A",
}

HIGH_CONTRAST_COLORS: Dict[str, str] = {
    "background": "#FFFFFF",
    "surface": "#F2F4F8",
    "surface_alt": "#E0E7F1",
    "primary": "#0B1F3B",
    "primary_light": "#123D73",
    "accent": "#000000",
    "positive": "#005C3C",
    "caution": "#7A5200",
    "negative": "#7A1F27",
    "neutral": "#4A5C73",
    "text": "#000000",
    "text_subtle": "#1F2933",
    "chart_optimistic": "#005C3C",
    "chart_realistic": "#123D73",
    "chart_pessimistic": "#7A1F27",
}

CUSTOM_STYLE_TEMPLATE = """
<style>
:root {{
    --font-scale: {font_scale};
}}
html, body, [data-testid="stAppViewContainer"] {{
    background-color: {background};
    color: {text};
    font-size: calc(1rem * var(--font-scale));
}}
h1, h2, h3 {{
    color: {primary};
}}
.sidebar-nav__header {{
    font-weight: 700;
    color: {primary};
    margin-bottom: 0.5rem;
}}
.responsive-card-grid {{
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(210px, 1fr));
    gap: 1rem;
    margin: 0.5rem 0 1.25rem;
}}
.metric-card {{
    background: {surface};
    border: 1px solid {neutral};
    border-radius: 12px;
    padding: 1rem 1.1rem;
}}
.metric-card--positive {{ border-left: 4px solid {positive}; }}
.metric-card--caution {{ border-left: 4px solid {caution}; }}
.metric-card--negative {{ border-left: 4px solid {negative}; }}
.metric-card__header {{
    display: flex;
    align-items: center;
    gap: 0.4rem;
    color: {text_subtle};
    font-size: 0.9rem;
}}
.metric-card__tone-badge {{ margin-left: auto; font-size: 0.8rem; }}
.metric-card__value {{
    font-size: 1.6rem;
    font-weight: 700;
    color: {primary};
    margin: 0.35rem 0 0.2rem;
}}
.metric-card__description, .metric-card__footnote {{
    color: {text_subtle};
    font-size: 0.85rem;
    margin: 0;
}}
.callout {{
    display: flex;
    gap: 0.75rem;
    padding: 0.9rem 1rem;
    border-radius: 10px;
    background: {surface_alt};
    margin: 0.75rem 0;
}}
.callout--positive {{ border-left: 4px solid {positive}; }}
.callout--caution {{ border-left: 4px solid {caution}; }}
.callout--negative {{ border-left: 4px solid {negative}; }}
.callout--neutral {{ border-left: 4px solid {accent}; }}
.callout__body p {{ margin: 0.2rem 0 0; }}
.score-bar {{
    background: {neutral};
    border-radius: 999px;
    height: 0.6rem;
    overflow: hidden;
}}
.score-bar__fill {{
    height: 100%;
    background: {accent};
}}
.score-bar__fill--positive {{ background: {positive}; }}
.score-bar__fill--caution {{ background: {caution}; }}
.score-bar__fill--negative {{ background: {negative}; }}
.status-badge {{
    display: inline-block;
    padding: 0.1rem 0.55rem;
    border-radius: 999px;
    font-size: 0.78rem;
    background: {surface_alt};
    color: {primary};
}}
.status-badge--positive {{ background: {positive}; color: #FFFFFF; }}
.status-badge--caution {{ background: {caution}; color: #FFFFFF; }}
.status-badge--negative {{ background: {negative}; color: #FFFFFF; }}
.workflow-banner {{
    background: {surface};
    border: 1px solid {neutral};
    border-radius: 12px;
    padding: 0.75rem 1rem;
    margin-bottom: 1rem;
}}
.workflow-banner__list {{
    display: flex;
    flex-wrap: wrap;
    gap: 0.75rem;
    list-style: none;
    padding: 0;
    margin: 0;
}}
.workflow-banner__item {{ color: {text_subtle}; }}
.workflow-banner__item--current {{ color: {primary}; font-weight: 700; }}
.workflow-banner__item--completed {{ color: {positive}; }}
.workflow-banner__badge {{
    font-size: 0.75rem;
    margin-right: 0.3rem;
}}
.workflow-banner__meta {{
    margin-top: 0.5rem;
    font-size: 0.85rem;
    color: {text_subtle};
}}
.app-footer {{
    color: {text_subtle};
    font-size: 0.85rem;
    text-align: center;
}}
.app-footer a {{ color: {accent}; }}
.statutes-preview {{
    background: {surface};
    border: 1px solid {neutral};
    border-radius: 8px;
    padding: 1rem;
    white-space: pre-wrap;
    font-family: "Courier New", monospace;
    font-size: 0.85rem;
    max-height: 32rem;
    overflow-y: auto;
}}
.visually-hidden {{
    position: absolute;
    width: 1px;
    height: 1px;
    overflow: hidden;
    clip: rect(0 0 0 0);
}}
@media (max-width: 768px) {{
    .responsive-card-grid {{ grid-template-columns: 1fr; }}
    .workflow-banner__list {{ flex-direction: column; }}
}}
@media (prefers-reduced-motion: reduce) {{
    *, *::before, *::after {{
        transition-duration: 0.001ms !important;
        animation-duration: 0.001ms !important;
    }}
}}
</style>
"""


def _clamp_font_scale(value: float) -> float:
    return max(0.85, min(1.4, value))


def _resolve_palette(*, color_scheme: str, high_contrast: bool) -> Dict[str, str]:
    if high_contrast:
        return HIGH_CONTRAST_COLORS
    if color_scheme == "dark":
        return DARK_THEME_COLORS
    return THEME_COLORS


def build_custom_style(
    *,
    font_scale: float = 1.0,
    high_contrast: bool = False,
    color_scheme: str = "light",
) -> str:
    palette = _resolve_palette(color_scheme=color_scheme, high_contrast=high_contrast)
    return CUSTOM_STYLE_TEMPLATE.format(
        font_scale=f"{_clamp_font_scale(font_scale):.2f}",
        **palette,
    )


def inject_theme() -> None:
    """Apply the shared CSS theme to the current page."""

    font_scale = float(st.session_state.get("ui_font_scale", 1.0))
    high_contrast = bool(st.session_state.get("ui_high_contrast", False))
    color_scheme = str(st.session_state.get("ui_color_scheme", "light"))
    st.markdown(
        build_custom_style(
            font_scale=font_scale,
            high_contrast=high_contrast,
            color_scheme=color_scheme,
        ),
        unsafe_allow_html=True,
    )


__all__ = [
    "THEME_COLORS",
    "HIGH_CONTRAST_COLORS",
    "DARK_THEME_COLORS",
    "build_custom_style",
    "inject_theme",
]

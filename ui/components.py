"""Reusable UI helpers for responsive cards, score bars and accessible callouts."""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Sequence

import streamlit as st

from formatting import clamp_percentage


@dataclass(frozen=True)
class MetricCard:
    icon: str
    label: str
    value: str
    description: str | None = None
    footnote: str | None = None
    aria_label: str | None = None
    tone: str | None = None  # "positive", "caution", "negative" or "neutral"


_TONE_BADGES: dict[str, tuple[str, str]] = {
    "positive": ("🟢", "Favorable"),
    "caution": ("⚠️", "À surveiller"),
    "negative": ("🔴", "Critique"),
}


def render_metric_cards(cards: Sequence[MetricCard], *, grid_aria_label: str | None = None) -> None:
    """Render metric cards in a responsive grid that works on mobile/tablet."""

    if not cards:
        return
    card_blocks: list[str] = []
    for card in cards:
        aria_attr = f" aria-label=\"{html.escape(card.aria_label)}\"" if card.aria_label else ""
        tone_class = f" metric-card--{card.tone}" if card.tone else ""
        tone_badge = ""
        if card.tone and card.tone in _TONE_BADGES:
            badge_icon, badge_label = _TONE_BADGES[card.tone]
            tone_badge = (
                "<span class='metric-card__tone-badge' role='img' "
                f"aria-label='{html.escape(badge_label)}'>{html.escape(badge_icon)}</span>"
            )
        description_html = (
            f"<p class='metric-card__description'>{html.escape(card.description)}</p>"
            if card.description
            else ""
        )
        footnote_html = (
            f"<p class='metric-card__footnote'>{html.escape(card.footnote)}</p>"
            if card.footnote
            else ""
        )
        block = (
            f"<section role='group'{aria_attr} class='metric-card{tone_class}'>"
            f"  <div class='metric-card__header'><span class='metric-card__icon'>{html.escape(card.icon)}</span>"
            f"  <span class='metric-card__label'>{html.escape(card.label)}</span>{tone_badge}</div>"
            f"  <p class='metric-card__value'>{html.escape(card.value)}</p>"
            f"  {description_html}{footnote_html}"
            "</section>"
        )
        card_blocks.append(block)
    region_attrs = ""
    if grid_aria_label:
        region_attrs = f" role='region' aria-label='{html.escape(grid_aria_label)}' aria-live='polite'"
    grid_html = (
        f"<div class='responsive-card-grid'{region_attrs}>" + "".join(card_blocks) + "</div>"
    )
    st.markdown(grid_html, unsafe_allow_html=True)


def render_callout(*, icon: str, title: str, body: str, tone: str = "neutral", aria_label: str | None = None) -> None:
    aria_attr = f" aria-label=\"{html.escape(aria_label)}\"" if aria_label else ""
    st.markdown(
        """
        <div class="callout callout--{tone}" role="note"{aria_attr}>
            <span class="callout__icon">{icon}</span>
            <div class="callout__body">
                <strong class="callout__title">{title}</strong>
                <p>{body}</p>
            </div>
        </div>
        """.format(tone=html.escape(tone), icon=html.escape(icon), title=html.escape(title), body=html.escape(body), aria_attr=aria_attr),
        unsafe_allow_html=True,
    )


def score_bar_html(value: object, *, tone: str = "neutral", label: str = "") -> str:
    """Horizontal bar whose width is the percentage *value* clamped to 0-100."""

    width = clamp_percentage(value)
    return (
        f"<div class='score-bar' role='progressbar' aria-valuenow='{width:.0f}' "
        f"aria-valuemin='0' aria-valuemax='100' aria-label='{html.escape(label)}'>"
        f"<div class='score-bar__fill score-bar__fill--{html.escape(tone)}' style='width: {width:.1f}%'></div>"
        "</div>"
    )


def render_score_bar(value: object, *, tone: str = "neutral", label: str = "") -> None:
    st.markdown(score_bar_html(value, tone=tone, label=label), unsafe_allow_html=True)


def status_badge_html(label: str, tone: str = "neutral") -> str:
    return f"<span class='status-badge status-badge--{html.escape(tone)}'>{html.escape(label)}</span>"


def record_heading_html(title: str, badge_html: str, *, suffix: str = "") -> str:
    """Bold record *title* followed by a status badge, with the user text HTML-escaped."""

    return f"**{html.escape(title)}**{html.escape(suffix)} {badge_html}"


def skipped_records_message(count: int) -> str | None:
    if count <= 0:
        return None
    return (
        f"{count} enregistrement(s) invalide(s) ignoré(s) ; "
        "ils seront supprimés à la prochaine sauvegarde."
    )


def render_skipped_records_warning(count: int) -> None:
    message = skipped_records_message(count)
    if message:
        st.warning(message)


__all__ = [
    "MetricCard",
    "record_heading_html",
    "render_callout",
    "render_metric_cards",
    "render_score_bar",
    "render_skipped_records_warning",
    "score_bar_html",
    "skipped_records_message",
    "status_badge_html",
]

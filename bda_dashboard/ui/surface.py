"""
Streamlit surface for the page model.

Each script run binds the mounts of the visible section to fresh
`st.empty()` placeholders, lets the dashboard write into them and finally
paints every bound mount once with its latest content.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Dict

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from streamlit_folium import st_folium

from .content import Bullets, Card, Cards, Groups, KeyValues, Links, MapView, Text
from .page import Page
from .theme import ThemeColors, use_badge

logger = logging.getLogger("bda.surface")


class Surface:
    """Placeholder bindings for one script run."""

    def __init__(self, page: Page, theme: ThemeColors):
        self.page = page
        self.theme = theme
        self._placeholders: Dict[str, Any] = {}

    def bind(self, mount_id: str, placeholder=None) -> None:
        """Attach `mount_id` to a placeholder created at the current position."""
        mount = self.page.mount(mount_id)
        if mount is None:
            return
        self._placeholders[mount_id] = placeholder if placeholder is not None else st.empty()

    def paint(self) -> None:
        logger.debug(f"Painting {len(self._placeholders)} mounts")
        for mount_id, placeholder in self._placeholders.items():
            mount = self.page.mount(mount_id)
            if mount is None:
                continue
            with placeholder.container():
                draw_content(mount_id, mount.content, self.theme)


# =============================================================================
# Content drawing
# =============================================================================

def draw_content(mount_id: str, content: Any, theme: ThemeColors) -> None:
    if content is None:
        st.caption("Loading...")
    elif isinstance(content, go.Figure):
        st.plotly_chart(content, use_container_width=True, key=f"chart-{mount_id}")
    elif isinstance(content, pd.DataFrame):
        _draw_frame(content)
    elif isinstance(content, MapView):
        st_folium(
            content.folium_map,
            height=content.height,
            use_container_width=True,
            returned_objects=[],
            key=f"map-{content.instance_id}-{content.size_revision}",
        )
    elif isinstance(content, Text):
        css = f' class="{content.style}"' if content.style else ""
        st.markdown(f"<div{css}>{html.escape(content.value)}</div>", unsafe_allow_html=True)
    elif isinstance(content, Bullets):
        _draw_bullets(content)
    elif isinstance(content, Cards):
        cols = st.columns(min(3, max(1, len(content.cards))))
        for i, card in enumerate(content.cards):
            with cols[i % len(cols)]:
                _draw_card(card)
    elif isinstance(content, Groups):
        for title, cards in content.groups.items():
            st.markdown(f'<div class="section-header">{html.escape(title)}</div>', unsafe_allow_html=True)
            for card in cards:
                _draw_card(card)
    elif isinstance(content, KeyValues):
        _draw_key_values(content)
    elif isinstance(content, Links):
        for link in content.links:
            note = f" ({link.note})" if link.note else ""
            st.markdown(f"[{link.title}]({link.url}){note}")
    else:
        st.write(content)


def _draw_frame(frame: pd.DataFrame) -> None:
    if frame.empty:
        st.caption("No matching records")
        return
    if "Use Type" in frame.columns:
        def badge(value):
            colors = use_badge(value)
            return f"background-color: {colors['bg']}; color: {colors['fg']}"
        st.dataframe(frame.style.map(badge, subset=["Use Type"]), use_container_width=True, hide_index=True)
    else:
        st.dataframe(frame, use_container_width=True, hide_index=True)


def _draw_bullets(bullets: Bullets) -> None:
    items = bullets.items or [bullets.empty_label]
    css = {"positive": "bullet-positive", "negative": "bullet-negative"}.get(bullets.tone, "")
    lines = "".join(f'<li class="{css}">{html.escape(str(item))}</li>' for item in items)
    st.markdown(f"<ul>{lines}</ul>", unsafe_allow_html=True)


def _draw_card(card: Card) -> None:
    title = html.escape(card.title)
    if card.url:
        title = f'<a href="{html.escape(card.url)}" target="_blank">{title}</a>'
    stats = "".join(
        f'<div class="bda-stat"><span>{html.escape(str(k))}</span><b>{html.escape(str(v))}</b></div>'
        for k, v in card.stats.items()
    )
    st.markdown(f"""
    <div class="bda-card">
        <h3>{title}</h3>
        <div class="subtitle">{html.escape(card.subtitle)}</div>
        {stats}
    </div>
    """, unsafe_allow_html=True)
    for line in card.body:
        st.markdown(line)


def _draw_key_values(kv: KeyValues) -> None:
    if kv.title:
        st.markdown(f'<div class="section-header">{html.escape(kv.title)}</div>', unsafe_allow_html=True)
    if not kv.items:
        st.caption("No data")
        return
    cols = st.columns(min(4, len(kv.items)))
    for i, (label, value) in enumerate(kv.items.items()):
        with cols[i % len(cols)]:
            text = str(value)
            if text.startswith("#") and len(text) in (4, 7):
                st.markdown(
                    f'<span class="badge" style="background:{html.escape(text)};color:#fff">&nbsp;</span> '
                    f'{html.escape(str(label))}',
                    unsafe_allow_html=True,
                )
            else:
                st.metric(str(label), text)

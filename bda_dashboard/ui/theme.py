"""
BDA Dashboard Theme

Earthy palette (earth / sage / terracotta), CSS generator and plotly
layout defaults.
"""

from dataclasses import dataclass
from typing import Dict

# =============================================================================
# Theme Configuration
# =============================================================================

@dataclass
class ThemeColors:
    """Color palette for a theme."""
    bg_primary: str
    bg_card: str
    text_primary: str
    text_secondary: str
    text_muted: str
    earth: str
    earth_light: str
    earth_dark: str
    sage: str
    terracotta: str
    border_default: str
    shadow: str


EARTH_THEME = ThemeColors(
    bg_primary="#faf8f5",
    bg_card="#ffffff",
    text_primary="#2a1f17",      # earth-900
    text_secondary="#5c4a36",
    text_muted="#8a7a68",
    earth="#8b6f47",             # earth-500
    earth_light="#d4c9ba",       # earth-200
    earth_dark="#2a1f17",
    sage="#7a8c5e",              # sage-500
    terracotta="#c85a36",        # terracotta-500
    border_default="#e8e0d5",
    shadow="0 2px 8px rgba(42, 31, 23, 0.06)",
)


# =============================================================================
# Use-type badges and boundary palette
# =============================================================================

USE_TYPE_BADGES = {
    "Residential": {"bg": "#f3efe9", "fg": "#5c4a36", "class": "bg-earth-100 text-earth-800"},
    "Industrial": {"bg": "#66784c", "fg": "#ffffff", "class": "bg-sage-600 text-white"},
    "Commercial": {"bg": "#c85a36", "fg": "#ffffff", "class": "bg-terracotta-500 text-white"},
}
DEFAULT_BADGE = {"bg": "#f3efe9", "fg": "#7a6650", "class": "bg-earth-100 text-earth-600"}

# Layout markers on the layouts map
MARKER_COLORS = {"Industrial": "red"}
DEFAULT_MARKER_COLOR = "blue"

CORPORATION_PALETTE = [
    "#8b6f47", "#7a8c5e", "#c85a36", "#5b7c99", "#a0785a",
    "#6b8e6b", "#b5654a", "#7d6b91",
]
JURISDICTION_COLOR = "#2a1f17"


def use_badge(use_type: str) -> Dict[str, str]:
    return USE_TYPE_BADGES.get(use_type, DEFAULT_BADGE)


def marker_color(use_type: str) -> str:
    return MARKER_COLORS.get(use_type, DEFAULT_MARKER_COLOR)


# =============================================================================
# CSS Generator
# =============================================================================

def generate_css(theme: ThemeColors) -> str:
    """Generate the dashboard CSS."""
    return f"""
<style>
    :root {{
        --bg-primary: {theme.bg_primary};
        --bg-card: {theme.bg_card};
        --text-primary: {theme.text_primary};
        --text-secondary: {theme.text_secondary};
        --text-muted: {theme.text_muted};
        --earth: {theme.earth};
        --sage: {theme.sage};
        --terracotta: {theme.terracotta};
        --border-default: {theme.border_default};
        --shadow: {theme.shadow};
    }}

    .stApp {{
        background: var(--bg-primary);
        color: var(--text-primary);
    }}

    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}

    .bda-header h1 {{
        margin: 0;
        font-size: 1.6rem;
        font-weight: 700;
        color: var(--text-primary);
    }}

    .bda-header p {{
        margin: 0.25rem 0 1rem 0;
        color: var(--text-muted);
    }}

    .section-header {{
        font-size: 1rem;
        font-weight: 600;
        color: var(--text-secondary);
        padding: 0.75rem 0;
        border-bottom: 2px solid var(--border-default);
        margin-bottom: 1rem;
    }}

    .bda-card {{
        background: var(--bg-card);
        border: 1px solid var(--border-default);
        border-radius: 8px;
        padding: 1.25rem;
        margin-bottom: 0.75rem;
        box-shadow: var(--shadow);
    }}

    .bda-card:hover {{
        border-color: var(--sage);
    }}

    .bda-card h3 {{
        font-size: 1.05rem;
        margin: 0 0 0.25rem 0;
        color: var(--text-primary);
    }}

    .bda-card .subtitle {{
        font-size: 0.85rem;
        color: var(--text-muted);
        margin-bottom: 0.75rem;
    }}

    .bda-stat {{
        display: flex;
        justify-content: space-between;
        font-size: 0.85rem;
        padding: 0.15rem 0;
    }}

    .bullet-positive {{ color: var(--sage); }}
    .bullet-negative {{ color: var(--terracotta); }}

    .badge {{
        padding: 0.1rem 0.5rem;
        border-radius: 999px;
        font-size: 0.75rem;
    }}

    .rating {{
        font-size: 2rem;
        font-weight: 700;
        color: var(--earth);
    }}
</style>
"""


def get_plotly_theme(theme: ThemeColors) -> Dict:
    """Get Plotly layout defaults for the theme."""
    return {
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "font": {"color": theme.earth},
        "colorway": [theme.earth, theme.sage, theme.terracotta, theme.earth_light],
        "margin": {"l": 40, "r": 20, "t": 30, "b": 40},
        "xaxis": {
            "gridcolor": theme.earth_light,
            "tickfont": {"color": theme.earth},
        },
        "yaxis": {
            "gridcolor": theme.earth_light,
            "tickfont": {"color": theme.earth},
        },
    }

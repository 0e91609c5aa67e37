"""
Presentation layer: page model, renderers, charts, maps and the Streamlit app.

The Streamlit surface is only imported by `app.py`; everything else runs
headless.
"""


def __getattr__(name):
    """Lazy import of the assembled dashboard."""
    if name == "Dashboard":
        from .dashboard import Dashboard
        globals()["Dashboard"] = Dashboard
        return Dashboard
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

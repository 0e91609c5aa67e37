"""
BDA Planning Dashboard

Static planning datasets (layouts, boundaries, departments, indicators)
fetched concurrently and rendered into tables, charts and maps.

Run with: streamlit run bda_dashboard/ui/app.py
"""

__version__ = "0.3.0"

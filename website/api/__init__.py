"""API Layer — routers, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Pages render Jinja2 templates; the tools API returns JSON
"""

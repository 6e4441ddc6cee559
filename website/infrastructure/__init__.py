"""Infrastructure Layer — logging sinks, templating and file access.

Invariants:
    - Infrastructure never imports from api/
"""

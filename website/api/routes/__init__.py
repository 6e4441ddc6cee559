"""Route Modules — one file per controller.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain business logic (delegate to core/)
"""

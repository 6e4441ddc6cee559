"""Website Package — personal site served by FastAPI.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

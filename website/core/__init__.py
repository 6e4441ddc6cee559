"""Core Layer — pure logic, no IO, no framework imports.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - All functions are deterministic given their inputs (random tools take an injectable source)
"""

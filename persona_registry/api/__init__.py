"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All error responses share the envelope built by core/errors.py

Design Decisions:
    - Thin routes delegate to the repository
"""

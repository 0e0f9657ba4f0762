"""Infrastructure — database engine/session lifecycle and logging setup.

Invariants:
    - Engine and pool are process singletons, created on startup
"""

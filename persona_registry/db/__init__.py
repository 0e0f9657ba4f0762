"""Database Metadata — SQLAlchemy declarative Base shared by every ORM model.

Invariants:
    - Single Base per process; Base.metadata drives create_all at startup and in tests
"""

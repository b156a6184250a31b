"""Database Metadata — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - The users table is created externally in production; tests build it from Base.metadata
"""

"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All storage calls wrapped with rollback and error mapping to DatabaseError
"""

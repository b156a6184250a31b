"""Services Layer — use-case orchestration between API and repositories.

Invariants:
    - Services never map errors to HTTP status codes (API layer does)
"""

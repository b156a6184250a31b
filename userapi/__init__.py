"""User API Package — HTTP CRUD service for the user resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"

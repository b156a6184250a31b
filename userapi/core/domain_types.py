"""Domain Types — identity types and fixed constants for the user resource.

Invariants:
    - UserId wraps the storage-assigned integer primary key (32-bit signed range)
    - DOB_FORMAT is the only accepted wire format for dates of birth
    - DEFAULT_LIST_LIMIT / DEFAULT_LIST_OFFSET are the fixed paging of GET /users

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Value Constants ─────────────────────────────────────────────

DOB_FORMAT = "%Y-%m-%d"
DOB_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
DOB_FORMAT_MESSAGE = "invalid dob format, expected YYYY-MM-DD"

NAME_MIN_LENGTH = 2

DEFAULT_LIST_LIMIT = 20
DEFAULT_LIST_OFFSET = 0

# Storage ids are 32-bit signed integers
USER_ID_MIN = -2**31
USER_ID_MAX = 2**31 - 1

"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate.name: at least 2 characters, required
    - UserCreate.dob: exactly YYYY-MM-DD and a real calendar date, parsed to date
    - A malformed dob fails with error type "dob_format" and a dob-specific message
    - UserResponse.age is derived, never accepted from clients

Design Decisions:
    - dob accepted as str and parsed in a validator: the exact wire format is
      enforced instead of Pydantic's lenient date coercion
    - Same schema for create and update (full replacement of name and dob)
"""

from datetime import date, datetime
import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from userapi.core.domain_types import (
    DOB_FORMAT, DOB_FORMAT_MESSAGE, DOB_PATTERN, NAME_MIN_LENGTH,
)

_DOB_RE = re.compile(DOB_PATTERN)


def parse_dob(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError on any other shape."""
    if not _DOB_RE.match(value):
        raise ValueError(DOB_FORMAT_MESSAGE)
    return datetime.strptime(value, DOB_FORMAT).date()


class UserCreate(BaseModel):
    """User create/update body."""
    name: str = Field(min_length=NAME_MIN_LENGTH)
    dob: date

    @field_validator("dob", mode="before")
    @classmethod
    def parse_dob_string(cls, v: object) -> date:
        if not isinstance(v, str):
            raise PydanticCustomError("dob_format", DOB_FORMAT_MESSAGE)
        try:
            return parse_dob(v)
        except ValueError:
            raise PydanticCustomError("dob_format", DOB_FORMAT_MESSAGE) from None


class UserResponse(BaseModel):
    """User response — storage fields plus the derived age."""
    id: int
    name: str
    dob: date
    age: int

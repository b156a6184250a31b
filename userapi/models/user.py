"""User ORM — the storage record for the user resource.

Invariants:
    - id is an integer primary key assigned by the database on insert
    - name is non-nullable text; dob is a calendar date (no time-of-day)
    - age is never stored (derived at response time by the service)
"""

from datetime import date

from sqlalchemy import Date, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from userapi.db.base import Base


class User(Base):
    """User storage record."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, dob={self.dob!r})"

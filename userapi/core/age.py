"""Age Calculation — whole years elapsed between a date of birth and "now".

Invariants:
    - Pure and total: no IO, no clock access, no error conditions
    - calculate_age(d, d) == 0 for every date d
    - Day-of-year comparison, not month/day: a birthday after Feb 28 is
      treated as one day late in a leap year of birth (e.g. dob 2000-03-01,
      now 2001-03-01 -> 0). Callers rely on this exact behavior.
"""

from datetime import date


def _day_of_year(d: date) -> int:
    return d.timetuple().tm_yday


def calculate_age(dob: date, now: date) -> int:
    """Return whole years from dob to now using a day-of-year comparison."""
    age = now.year - dob.year
    if _day_of_year(now) < _day_of_year(dob):
        age -= 1
    return age

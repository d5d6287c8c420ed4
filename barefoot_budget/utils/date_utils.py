"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List

DAYS_IN_FORTNIGHT = 14


def add_fortnights(start: date, fortnights: int) -> date:
    """Step a nominal start date forward by whole 14-day periods"""
    return start + timedelta(days=fortnights * DAYS_IN_FORTNIGHT)


def fortnight_iso(start: date, fortnights: int) -> str:
    """YYYY-MM-DD of the date `fortnights` periods after start"""
    return add_fortnights(start, fortnights).isoformat()


def generate_fortnight_dates(start: date, count: int) -> List[date]:
    """Generate `count` dates 14 days apart, beginning at start"""
    return [add_fortnights(start, i) for i in range(count)]

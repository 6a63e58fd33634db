"""Diagnostics package.

- pretty_month, year_table, round_trip: always available
- moon_drift: needs the optional numpy/matplotlib extras
"""

__all__ = ["pretty_month", "round_trip", "year_table", "moon_drift"]

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Runtime values live in ``PolicyConfig``; these are only its defaults.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_TOLERANCE_MINUTES = 20
DEFAULT_START_ALLOWANCE_MINUTES = 30
DEFAULT_END_ALLOWANCE_MINUTES = 30
DEFAULT_REGULAR_HOURS_CAP = 8
DEFAULT_MAX_DAILY_HOURS = 24
DEFAULT_OVERTIME_MULTIPLIER = 1.5
DEFAULT_DAYS_IN_MONTH_DIVISOR = 31

DEFAULT_MEDIUM_DISCREPANCY_MINUTES = 60
DEFAULT_HIGH_DISCREPANCY_MINUTES = 120
DEFAULT_EXCESSIVE_OVERTIME_HOURS = 4
DEFAULT_LOW_ATTENDANCE_RATE = 80

DEFAULT_WORKER_COUNT = 4
DEFAULT_WEEKEND_DAYS = (5, 6)

# Excel serial dates count days from 1899-12-30.
EXCEL_EPOCH_YEAR, EXCEL_EPOCH_MONTH, EXCEL_EPOCH_DAY = 1899, 12, 30

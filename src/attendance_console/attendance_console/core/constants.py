"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EDIT_WINDOW_DAYS = 30
DEFAULT_AGE_TOLERANCE_YEARS = 1
DEFAULT_CLOCK_SKEW_MINUTES = 5
DEFAULT_BULK_LIMIT = 100
DEFAULT_BULK_ATTENDANCE_LIMIT = 500
DEFAULT_IMPORT_ROW_LIMIT = 500
DEFAULT_DATE_RANGE_DAYS = 365
DEFAULT_MIN_SCHEDULE_MINUTES = 30
STUDENT_NUMBER_YEARS_BACK = 10
STUDENT_NUMBER_YEARS_AHEAD = 1

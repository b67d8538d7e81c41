import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

ATTENDANCE_EDIT_WINDOW_DAYS = 30
AGE_TOLERANCE_YEARS = 1
CLOCK_SKEW_MINUTES = 5
DUPLICATE_ATTENDANCE_BY_TIME_SLOT = False

BULK_ATTENDANCE_LIMIT = 500
IMPORT_ROW_LIMIT = 500

SCHOOL_EMAIL_DOMAIN = ""

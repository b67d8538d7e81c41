import os

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ATTENDANCE_EDIT_WINDOW_DAYS = int(os.getenv("ATTENDANCE_EDIT_WINDOW_DAYS", "30"))
AGE_TOLERANCE_YEARS = int(os.getenv("AGE_TOLERANCE_YEARS", "1"))
CLOCK_SKEW_MINUTES = int(os.getenv("CLOCK_SKEW_MINUTES", "5"))
DUPLICATE_ATTENDANCE_BY_TIME_SLOT = bool(int(os.getenv("DUPLICATE_ATTENDANCE_BY_TIME_SLOT", "0")))

BULK_ATTENDANCE_LIMIT = int(os.getenv("BULK_ATTENDANCE_LIMIT", "500"))
IMPORT_ROW_LIMIT = int(os.getenv("IMPORT_ROW_LIMIT", "500"))

SCHOOL_EMAIL_DOMAIN = os.getenv("SCHOOL_EMAIL_DOMAIN", "")

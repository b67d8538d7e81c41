import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Attendance older than this many days can no longer be edited
ATTENDANCE_EDIT_WINDOW_DAYS = int(os.getenv("ATTENDANCE_EDIT_WINDOW_DAYS", "30"))
# Allowed gap (years) between a declared age and the birthdate
AGE_TOLERANCE_YEARS = int(os.getenv("AGE_TOLERANCE_YEARS", "1"))
# Marks stamped this many minutes ahead of the server clock are still accepted
CLOCK_SKEW_MINUTES = int(os.getenv("CLOCK_SKEW_MINUTES", "5"))
# 1 = arrival and departure on the same day are separate marks
DUPLICATE_ATTENDANCE_BY_TIME_SLOT = bool(int(os.getenv("DUPLICATE_ATTENDANCE_BY_TIME_SLOT", "0")))

BULK_ATTENDANCE_LIMIT = int(os.getenv("BULK_ATTENDANCE_LIMIT", "500"))
IMPORT_ROW_LIMIT = int(os.getenv("IMPORT_ROW_LIMIT", "500"))

# e.g. "school.edu"; empty disables the domain check
SCHOOL_EMAIL_DOMAIN = os.getenv("SCHOOL_EMAIL_DOMAIN", "")

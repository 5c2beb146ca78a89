"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30
RECENT_RECORDS_LIMIT = 100
ANALYTICS_RECENT_LIMIT = 10

# Browser geolocation options (PositionOptions.timeout / maximumAge).
GEOLOCATION_TIMEOUT_SECONDS = 10
GEOLOCATION_MAX_AGE_SECONDS = 60

# Heuristic denominator for the admin attendance rate, not a real calendar.
ASSUMED_WORKING_DAYS = 30

DEFAULT_STUDENT_ID_PATTERN = r"^FCP/CCS/\d{2}/\d{4,}$"
STUDENT_ID_EXAMPLE = "FCP/CCS/20/1234"

CSV_HEADER = ("Student Name", "Student ID", "Date", "Time", "Location")
CSV_FILENAME_TEMPLATE = "attendance-report-{date}.csv"

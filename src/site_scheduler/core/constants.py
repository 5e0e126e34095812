"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60
FIRST_DAY_OF_WEEK = 1
LAST_DAY_OF_WEEK = 7

DEFAULT_SESSION_DAYS = 7
DEFAULT_NOTIFY_SIGNATURE = "Lave Propre & Service"

HOURS_EXPORT_FILENAME = "heures_lave_propre.csv"
HOURS_EXPORT_HEADERS = (
    "dayOfWeek",
    "employee",
    "employeeEmail",
    "hourlyRateCents",
    "site",
    "city",
    "start",
    "end",
    "durationMin",
    "status",
    "checklist",
)

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0
DEFAULT_FENCE_RADIUS_METERS = 100

# Presence tracking
DEFAULT_OUTSIDE_PING_THRESHOLD = 5
DEFAULT_STALE_AFTER_MINUTES = 10
DEFAULT_RESUME_WINDOW_MINUTES = 30

# Attendance policy
DEFAULT_WORK_START_TIME = "09:00"
DEFAULT_WORK_END_TIME = "18:00"
DEFAULT_LATE_THRESHOLD_MINUTES = 555
DEFAULT_HALF_DAY_THRESHOLD_MINUTES = 720
GRACE_MINUTES = 15
EARLY_IN_WINDOW_MINUTES = 30
LATE_OUT_WINDOW_MINUTES = 30
MISSED_PUNCH_WINDOW_MINUTES = 60
HALF_DAY_OUT_MIN_DURATION_MINUTES = 240

DEFAULT_HISTORY_LIMIT = 30
TRAVEL_WORK_MODES = frozenset({"FIELD_SALES", "REMOTE"})

# Identity match service scores similarity 0-100.
DEFAULT_MIN_FACE_SIMILARITY = 80.0

# Payroll
ADVANCE_DEDUCTION_PRECISION = 2

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TRACKING = {
    "outside_ping_threshold": 5,
    "stale_after_minutes": 10,
    "resume_window_minutes": 30,
}

ATTENDANCE_DEFAULTS = {
    "work_start_time": "09:00",
    "work_end_time": "18:00",
    "late_threshold_minutes": 555,
    "half_day_threshold_minutes": 720,
}

MIN_FACE_SIMILARITY = 80.0
REPORT_WORKERS = 2

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TRACKING = {
    "outside_ping_threshold": int(os.getenv("OUTSIDE_PING_THRESHOLD", "5")),
    "stale_after_minutes": int(os.getenv("STALE_AFTER_MINUTES", "10")),
    "resume_window_minutes": int(os.getenv("RESUME_WINDOW_MINUTES", "30")),
}

ATTENDANCE_DEFAULTS = {
    "work_start_time": os.getenv("WORK_START_TIME", "09:00"),
    "work_end_time": os.getenv("WORK_END_TIME", "18:00"),
    "late_threshold_minutes": int(os.getenv("LATE_THRESHOLD_MINUTES", "555")),
    "half_day_threshold_minutes": int(os.getenv("HALF_DAY_THRESHOLD_MINUTES", "720")),
}

MIN_FACE_SIMILARITY = float(os.getenv("MIN_FACE_SIMILARITY", "80"))
REPORT_WORKERS = int(os.getenv("REPORT_WORKERS", "8"))

"""Geo Attendance package.

Face-verified check-in/check-out with geofence tracking, a daily attendance
status engine and request/payroll glue. Organised by feature modules
(geofence, tracking, attendance, status, ...) with Protocol repositories and
service classes that never talk to a concrete store directly.
"""

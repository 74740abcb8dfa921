"""Example: drive the service layer directly (no HTTP layer).

Checks an employee in at their branch, streams a few pings and prints the
live status and today's report line.
"""

from datetime import datetime, timedelta

from geo_attendance.geofence.model import Coordinates
from geo_attendance.main import create_container


def main():
    container = create_container()
    attendance = container.attendance_service
    presence = container.presence

    start = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
    office = Coordinates.from_client("12.9716", "77.5946")

    result = attendance.check_in("EMP001", location=office, now=start)
    print(result.message)

    for minute in range(1, 4):
        ping = presence.handle_ping("EMP001", office, start + timedelta(minutes=minute))
        print(ping.to_dict())

    status = attendance.get_status("EMP001", now=start + timedelta(minutes=5))
    print("can check out:", status.can_check_out, "worked:", status.total_work_duration_minutes, "min")

    for row in container.report_service.daily_report(start.date(), now=start + timedelta(minutes=5)):
        print(row.to_dict())


if __name__ == "__main__":
    main()

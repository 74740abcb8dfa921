from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_session_repository import MySQLSessionRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MIN_FACE_SIMILARITY
from .database.connection import DBConfig, DatabaseConnection
from .durations.service import DurationService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .geofence.mysql_fence_repository import MySQLFenceRepository
from .geofence.service import GeofenceService
from .identity.matcher import FaceMatcher
from .identity.service import IdentityService
from .payroll.service import PayrollService
from .reports.service import ReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import PolicyProvider
from .status.engine import AttendanceStatusEngine
from .tracking.locks import EmployeeLocks
from .tracking.model import TrackingConfig
from .tracking.mysql_tracking_repository import MySQLPingLogRepository, MySQLTrackingStateRepository
from .tracking.state_machine import PresenceStateMachine


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    fences_repo: MySQLFenceRepository
    settings_repo: MySQLSettingsRepository
    sessions_repo: MySQLSessionRepository
    tracking_repo: MySQLTrackingStateRepository
    pings_repo: MySQLPingLogRepository
    requests_repo: MySQLRequestRepository

    geofence_service: GeofenceService
    policy_provider: PolicyProvider
    presence: PresenceStateMachine
    duration_service: DurationService
    attendance_service: AttendanceService
    request_service: RequestService
    report_service: ReportService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: dict,
    tracking: Optional[Mapping] = None,
    attendance_defaults: Optional[Mapping] = None,
    face_matcher: Optional[FaceMatcher] = None,
    min_face_similarity: float = DEFAULT_MIN_FACE_SIMILARITY,
    report_workers: int = 4,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    fences_repo = MySQLFenceRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    sessions_repo = MySQLSessionRepository(conn)
    tracking_repo = MySQLTrackingStateRepository(conn)
    pings_repo = MySQLPingLogRepository(conn)
    requests_repo = MySQLRequestRepository(conn)

    locks = EmployeeLocks()
    geofence_service = GeofenceService(fences_repo, settings_repo)
    policy_provider = PolicyProvider(settings_repo, defaults=attendance_defaults)
    presence = PresenceStateMachine(
        tracking_repo,
        sessions_repo,
        pings_repo,
        geofence_service,
        config=TrackingConfig(**dict(tracking or {})),
        locks=locks,
    )
    duration_service = DurationService(sessions_repo, requests_repo, pings_repo)
    identity = IdentityService(face_matcher, min_similarity=min_face_similarity) if face_matcher else None
    attendance_service = AttendanceService(
        employees_repo,
        sessions_repo,
        tracking_repo,
        presence,
        geofence_service,
        policy_provider,
        duration_service,
        identity=identity,
        locks=locks,
    )
    request_service = RequestService(requests_repo, employees_repo)
    report_service = ReportService(
        employees_repo,
        sessions_repo,
        requests_repo,
        policy_provider,
        engine=AttendanceStatusEngine(),
        max_workers=report_workers,
    )
    payroll_service = PayrollService(employees_repo, requests_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        fences_repo=fences_repo,
        settings_repo=settings_repo,
        sessions_repo=sessions_repo,
        tracking_repo=tracking_repo,
        pings_repo=pings_repo,
        requests_repo=requests_repo,
        geofence_service=geofence_service,
        policy_provider=policy_provider,
        presence=presence,
        duration_service=duration_service,
        attendance_service=attendance_service,
        request_service=request_service,
        report_service=report_service,
        payroll_service=payroll_service,
    )

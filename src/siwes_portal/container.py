from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceRecorder
from .auth.gateway import AuthGateway
from .auth.mysql_auth_gateway import MySQLAuthGateway
from .auth.service import LoginPolicy, LoginService
from .core.constants import ASSUMED_WORKING_DAYS, DEFAULT_STUDENT_ID_PATTERN
from .database.connection import DBConfig, DatabaseConnection
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import IdentityResolver, ProfileService
from .reports.service import AggregationService
from .session.router import SessionRouter


@dataclass(frozen=True)
class Container:
    auth_gateway: AuthGateway
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    locations_repo: LocationRepository

    identity_resolver: IdentityResolver
    login_service: LoginService
    profile_service: ProfileService
    session_router: SessionRouter
    attendance_recorder: AttendanceRecorder
    aggregation_service: AggregationService
    location_service: LocationService


def wire_container(
    *,
    auth_gateway: AuthGateway,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    locations_repo: LocationRepository,
    settings: Mapping[str, Any],
    clock=None,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    pattern = settings.get("STUDENT_ID_PATTERN", DEFAULT_STUDENT_ID_PATTERN)

    identity_resolver = IdentityResolver(
        profiles_repo,
        admin_emails=settings.get("ADMIN_BOOTSTRAP_EMAILS", ()),
        admin_bootstrap_enabled=bool(settings.get("ADMIN_BOOTSTRAP_ENABLED", False)),
    )
    login_service = LoginService(auth_gateway, identity_resolver, LoginPolicy.from_config(settings))
    profile_service = ProfileService(profiles_repo)
    attendance_recorder = AttendanceRecorder(
        attendance_repo,
        timezone=settings.get("TIMEZONE"),
        clock=clock,
    )
    aggregation_service = AggregationService(
        attendance_repo,
        profiles_repo,
        locations_repo,
        assumed_working_days=int(settings.get("ASSUMED_WORKING_DAYS", ASSUMED_WORKING_DAYS)),
    )
    location_service = LocationService(locations_repo, profiles_repo, student_id_pattern=pattern)

    return Container(
        auth_gateway=auth_gateway,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        locations_repo=locations_repo,
        identity_resolver=identity_resolver,
        login_service=login_service,
        profile_service=profile_service,
        session_router=SessionRouter(),
        attendance_recorder=attendance_recorder,
        aggregation_service=aggregation_service,
        location_service=location_service,
    )


def build_container(*, db_config: dict, settings: Mapping[str, Any]) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        auth_gateway=MySQLAuthGateway(conn),
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        settings=settings,
    )

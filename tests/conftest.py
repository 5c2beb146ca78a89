from __future__ import annotations

import uuid
from datetime import date, datetime, time
from typing import Optional

import pytest

from siwes_portal.attendance.model import AttendanceRecord
from siwes_portal.auth.model import Identity
from siwes_portal.container import wire_container
from siwes_portal.core.enums import Role, SessionState
from siwes_portal.core.exceptions import AuthenticationError, DuplicateRecordError, ExternalServiceError
from siwes_portal.locations.model import LocationAssignment
from siwes_portal.profiles.model import Profile
from siwes_portal.session.model import PortalSession

TEST_SETTINGS = {
    "TIMEZONE": "Africa/Lagos",
    "STUDENT_EMAIL_DOMAIN": "fud.edu.ng",
    "DEFAULT_STUDENT_PASSWORD": "password",
    "MIN_PASSWORD_LENGTH": 4,
    "AUTO_REGISTER_STUDENTS": True,
    "ADMIN_BOOTSTRAP_ENABLED": True,
    "ADMIN_BOOTSTRAP_EMAILS": ("admin@fud.edu.ng",),
    "GUEST_LOGIN_ENABLED": True,
}


class InMemoryAuthGateway:
    def __init__(self):
        self.accounts: dict[str, dict] = {}
        self.calls: list[str] = []

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        self.calls.append(f"sign_in:{email}")
        account = self.accounts.get(email)
        if not account or account["password"] != password:
            raise AuthenticationError("Invalid login credentials")
        return Identity(user_id=account["user_id"], email=email, claims=dict(account["claims"]))

    def sign_up(self, email: str, password: str, *, claims: Optional[dict] = None) -> Identity:
        self.calls.append(f"sign_up:{email}")
        if email in self.accounts:
            raise AuthenticationError("User already registered")
        user_id = str(uuid.uuid4())
        self.accounts[email] = {"user_id": user_id, "password": password, "claims": dict(claims or {})}
        return Identity(user_id=user_id, email=email, claims=dict(claims or {}))

    def sign_in_anonymously(self) -> Identity:
        self.calls.append("anonymous")
        return Identity(user_id=str(uuid.uuid4()), email=None, is_anonymous=True)

    def sign_in_with_oauth(self, provider: str) -> Identity:
        raise ExternalServiceError(f"Provider {provider} is not enabled")


class InMemoryProfiles:
    def __init__(self):
        self.by_user: dict[str, Profile] = {}
        self.create_calls = 0
        self._tick = 0

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return self.by_user.get(user_id)

    def get_by_student_id(self, student_id: str) -> Optional[Profile]:
        return next((p for p in self.by_user.values() if p.student_id == student_id), None)

    def create(self, *, user_id, first_name, last_name, role, student_id) -> None:
        self.create_calls += 1
        if user_id in self.by_user or (student_id and self.get_by_student_id(student_id)):
            raise DuplicateRecordError("Duplicate entry")
        self._tick += 1
        self.by_user[user_id] = Profile(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            role=Role(role),
            student_id=student_id,
            created_at=datetime(2024, 1, 1, 0, 0, self._tick),
        )

    def update_names(self, *, user_id, first_name, last_name) -> None:
        p = self.by_user[user_id]
        self.by_user[user_id] = Profile(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            role=p.role,
            student_id=p.student_id,
            created_at=p.created_at,
        )

    def list_by_role(self, role):
        items = [p for p in self.by_user.values() if p.role == role]
        items.sort(key=lambda p: p.created_at, reverse=True)
        return items

    def count_by_role(self, role) -> int:
        return len(self.list_by_role(role))

    def add(self, *, user_id: str, first_name: str, last_name: str, role: Role, student_id=None) -> Profile:
        self.create(user_id=user_id, first_name=first_name, last_name=last_name, role=role, student_id=student_id)
        return self.by_user[user_id]


class InMemoryAttendance:
    """Enforces UNIQUE(user_id, record_date) like the MySQL table."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.create_calls = 0
        self.fail_with: Optional[Exception] = None

    def get_for_user_and_date(self, user_id: str, record_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.records.values() if r.user_id == user_id and r.record_date == record_date),
            None,
        )

    def list_for_user(self, user_id: str, limit: int):
        items = [r for r in self.records.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.record_id, reverse=True)
        return items[:limit]

    def create(self, *, user_id, student_name, student_id, record_date, record_time, latitude, longitude, location) -> int:
        self.create_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        if self.get_for_user_and_date(user_id, record_date):
            raise DuplicateRecordError("Duplicate entry for key 'uq_attendance_user_date'")
        self._id += 1
        self.records[self._id] = AttendanceRecord(
            record_id=self._id,
            user_id=user_id,
            student_name=student_name,
            student_id=student_id,
            record_date=record_date,
            record_time=record_time,
            latitude=latitude,
            longitude=longitude,
            location=location,
        )
        return self._id

    def list_recent(self, limit: int):
        return sorted(self.records.values(), key=lambda r: r.record_id, reverse=True)[:limit]

    def list_after(self, record_id: int, limit: int):
        return sorted((r for r in self.records.values() if r.record_id > record_id), key=lambda r: r.record_id)[:limit]

    def count_all(self) -> int:
        return len(self.records)

    def count_for_date(self, record_date: date) -> int:
        return sum(1 for r in self.records.values() if r.record_date == record_date)

    def delete_all(self) -> int:
        n = len(self.records)
        self.records.clear()
        return n

    def add(self, *, user_id: str, name: str, student_id=None, on: date, at: time, location="Location (9.0000, 7.0000)") -> int:
        return self.create(
            user_id=user_id,
            student_name=name,
            student_id=student_id,
            record_date=on,
            record_time=at,
            latitude=9.0,
            longitude=7.0,
            location=location,
        )


class InMemoryLocations:
    def __init__(self):
        self.items: dict[int, LocationAssignment] = {}
        self._id = 0

    def get_by_student_id(self, student_id: str) -> Optional[LocationAssignment]:
        return next((a for a in self.items.values() if a.student_id == student_id), None)

    def create(self, *, student_id, location, company, address, supervisor, phone, assigned_by) -> int:
        if self.get_by_student_id(student_id):
            raise DuplicateRecordError("Duplicate entry")
        self._id += 1
        self.items[self._id] = LocationAssignment(
            location_id=self._id,
            student_id=student_id,
            location=location,
            company=company,
            address=address,
            supervisor=supervisor,
            phone=phone,
            assigned_by=assigned_by,
        )
        return self._id

    def update(self, *, location_id, location, company, address, supervisor, phone, assigned_by) -> None:
        old = self.items[location_id]
        self.items[location_id] = LocationAssignment(
            location_id=location_id,
            student_id=old.student_id,
            location=location,
            company=company,
            address=address,
            supervisor=supervisor,
            phone=phone,
            assigned_by=assigned_by,
        )

    def delete_by_id(self, location_id: int) -> bool:
        return self.items.pop(location_id, None) is not None

    def list_all(self):
        return sorted(self.items.values(), key=lambda a: a.location_id, reverse=True)

    def count_all(self) -> int:
        return len(self.items)


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now():
    return FixedClock(datetime(2024, 3, 1, 9, 15, 0))


@pytest.fixture
def gateway():
    return InMemoryAuthGateway()


@pytest.fixture
def profiles():
    return InMemoryProfiles()


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def locations():
    return InMemoryLocations()


@pytest.fixture
def container(gateway, profiles, attendance, locations, fixed_now):
    return wire_container(
        auth_gateway=gateway,
        profiles_repo=profiles,
        attendance_repo=attendance,
        locations_repo=locations,
        settings=TEST_SETTINGS,
        clock=fixed_now,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from siwes_portal.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_session():
    def _make(state: SessionState, *, user_id="u-1", first_name="Ada", last_name="Obi", student_id=None) -> PortalSession:
        role = {
            SessionState.ADMIN: Role.ADMIN,
            SessionState.STUDENT: Role.STUDENT,
            SessionState.GUEST: Role.GUEST,
        }.get(state)
        return PortalSession(
            state=state,
            user_id=user_id,
            role=role,
            first_name=first_name,
            last_name=last_name,
            student_id=student_id,
        )

    return _make

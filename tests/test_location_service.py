from __future__ import annotations

import pytest

from siwes_portal.core.enums import Role, SessionState
from siwes_portal.core.exceptions import AuthorizationError, ValidationError

STUDENT_ID = "FCP/CCS/20/1234"


@pytest.fixture
def student(profiles):
    return profiles.add(user_id="s1", first_name="Ada", last_name="Obi", role=Role.STUDENT, student_id=STUDENT_ID)


def test_assign_then_reassign_updates_in_place(container, locations, student, make_session):
    admin = make_session(SessionState.ADMIN, user_id="a1")
    service = container.location_service

    first, created = service.assign(admin, student_id=STUDENT_ID, location="Abuja", company="Galaxy Backbone")
    assert created
    assert first.company == "Galaxy Backbone"
    assert first.assigned_by == "a1"

    second, created = service.assign(admin, student_id="fcp/ccs/20/1234", location="Lagos", supervisor="  ")
    assert not created
    assert second.location_id == first.location_id
    assert second.location == "Lagos"
    assert second.company is None
    assert second.supervisor is None
    assert locations.count_all() == 1
    assert service.for_student(STUDENT_ID) == second


def test_only_admins_assign(container, student, make_session):
    with pytest.raises(AuthorizationError):
        container.location_service.assign(make_session(SessionState.STUDENT), student_id=STUDENT_ID, location="Abuja")


@pytest.mark.parametrize(
    "student_id,location,message",
    [
        ("", "Abuja", "Student ID is required"),
        ("FCP/CCS/20/12", "Abuja", "Invalid student ID format"),
        (STUDENT_ID, " ", "Location is required"),
        ("FCP/CCS/20/9999", "Abuja", "No registered student"),
    ],
)
def test_assign_validation(container, student, make_session, student_id, location, message):
    with pytest.raises(ValidationError, match=message):
        container.location_service.assign(make_session(SessionState.ADMIN), student_id=student_id, location=location)


def test_list_with_names_marks_orphans_unknown(container, locations, student):
    locations.create(student_id=STUDENT_ID, location="Abuja", company=None, address=None, supervisor=None, phone=None, assigned_by="a1")
    locations.create(
        student_id="FCP/CCS/19/0001", location="Kano", company=None, address=None, supervisor=None, phone=None, assigned_by="a1"
    )

    rows = container.location_service.list_with_names()

    assert [(r["assignment"].student_id, r["student_name"]) for r in rows] == [
        ("FCP/CCS/19/0001", "Unknown"),
        (STUDENT_ID, "Ada Obi"),
    ]


def test_remove(container, locations, student, make_session):
    admin = make_session(SessionState.ADMIN)
    assignment, _ = container.location_service.assign(admin, student_id=STUDENT_ID, location="Abuja")

    with pytest.raises(AuthorizationError):
        container.location_service.remove(make_session(SessionState.STUDENT), assignment.location_id)

    container.location_service.remove(admin, assignment.location_id)
    assert locations.count_all() == 0

    with pytest.raises(ValidationError, match="not found"):
        container.location_service.remove(admin, assignment.location_id)


def test_student_without_id_has_no_assignment(container):
    assert container.location_service.for_student(None) is None

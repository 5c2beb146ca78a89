from __future__ import annotations

import csv
import io
from datetime import date, time

import pytest

from siwes_portal.core.enums import Role, SessionState
from siwes_portal.core.exceptions import AuthorizationError
from siwes_portal.reports.csv_export import export_filename, records_to_csv
from siwes_portal.reports.service import attendance_rate, today_count

TODAY = date(2024, 3, 1)


@pytest.mark.parametrize(
    "total,students,days,expected",
    [
        (0, 10, 30, 0),
        (10, 0, 30, 0),
        (10, 5, 0, 0),
        (15, 1, 30, 50),
        (1, 3, 30, 1),
        (3, 4, 30, 3),
        (1, 8, 30, 0),
        (5000, 2, 30, 100),
    ],
)
def test_attendance_rate(total, students, days, expected):
    assert attendance_rate(total, students, days) == expected


def test_attendance_rate_is_always_a_percentage():
    for total in range(0, 200, 7):
        for students in range(0, 12):
            assert 0 <= attendance_rate(total, students) <= 100


def test_today_count(attendance):
    attendance.add(user_id="a", name="A", on=TODAY, at=time(9))
    attendance.add(user_id="b", name="B", on=TODAY, at=time(10))
    attendance.add(user_id="a", name="A", on=date(2024, 2, 29), at=time(9))

    assert today_count(attendance.list_recent(100), TODAY) == 2


def test_count_for_date_is_not_limited_to_the_recent_window(container, attendance):
    for n in range(101):
        attendance.add(user_id=f"u{n}", name=f"Student {n}", on=TODAY, at=time(8))
    for n in range(5):
        attendance.add(user_id=f"u{n}", name=f"Student {n}", on=date(2024, 3, 2), at=time(8))

    assert today_count(attendance.list_recent(100), TODAY) == 95
    assert container.aggregation_service.count_for_date(TODAY) == 101


def test_overview_counts_students_only(container, profiles, attendance, locations):
    profiles.add(user_id="s1", first_name="Ada", last_name="Obi", role=Role.STUDENT, student_id="FCP/CCS/20/0001")
    profiles.add(user_id="s2", first_name="Bola", last_name="Ade", role=Role.STUDENT, student_id="FCP/CCS/20/0002")
    profiles.add(user_id="g1", first_name="Guest", last_name="User", role=Role.GUEST)
    profiles.add(user_id="a1", first_name="System", last_name="Administrator", role=Role.ADMIN)
    attendance.add(user_id="s1", name="Ada Obi", on=TODAY, at=time(9))
    attendance.add(user_id="g1", name="Guest User", on=TODAY, at=time(9, 30))
    attendance.add(user_id="s2", name="Bola Ade", on=date(2024, 2, 29), at=time(9))
    locations.create(
        student_id="FCP/CCS/20/0001", location="Abuja", company=None, address=None, supervisor=None, phone=None, assigned_by="a1"
    )

    overview = container.aggregation_service.overview(TODAY)

    assert overview.total_students == 2
    assert overview.today_check_ins == 2
    assert overview.total_check_ins == 3
    assert overview.locations_assigned == 1
    assert overview.attendance_rate == 5
    assert [r.user_id for r in overview.recent] == ["s2", "g1", "s1"]


def test_csv_has_one_row_per_record_in_order(attendance):
    attendance.add(user_id="a", name="Ada Obi", student_id="FCP/CCS/20/1234", on=TODAY, at=time(9, 15))
    attendance.add(user_id="b", name="Guest User", on=TODAY, at=time(10, 5, 7), location=None)
    records = attendance.list_recent(100)

    rows = list(csv.reader(io.StringIO(records_to_csv(records))))

    assert rows[0] == ["Student Name", "Student ID", "Date", "Time", "Location"]
    assert rows[1:] == [
        ["Guest User", "", "2024-03-01", "10:05:07", "Unknown"],
        ["Ada Obi", "FCP/CCS/20/1234", "2024-03-01", "09:15:00", "Location (9.0000, 7.0000)"],
    ]


def test_csv_quotes_commas_in_names(attendance):
    attendance.add(user_id="a", name="Obi, Ada", on=TODAY, at=time(9))

    content = records_to_csv(attendance.list_recent(10))

    assert '"Obi, Ada"' in content


def test_empty_export_produces_nothing():
    assert records_to_csv([]) is None
    assert export_filename(TODAY) == "attendance-report-2024-03-01.csv"


def test_feed_returns_records_after_the_cursor(container, attendance):
    first = attendance.add(user_id="a", name="A", on=TODAY, at=time(9))
    second = attendance.add(user_id="b", name="B", on=TODAY, at=time(9, 5))

    assert [r.record_id for r in container.aggregation_service.records_after(0)] == [first, second]
    assert [r.record_id for r in container.aggregation_service.records_after(first)] == [second]
    assert container.aggregation_service.records_after(second) == []


def test_clear_all_is_admin_only(container, attendance, make_session):
    attendance.add(user_id="a", name="A", on=TODAY, at=time(9))
    attendance.add(user_id="b", name="B", on=TODAY, at=time(9))

    with pytest.raises(AuthorizationError):
        container.aggregation_service.clear_all(make_session(SessionState.STUDENT))
    assert attendance.count_all() == 2

    assert container.aggregation_service.clear_all(make_session(SessionState.ADMIN)) == 2
    assert attendance.count_all() == 0

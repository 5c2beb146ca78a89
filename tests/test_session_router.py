from __future__ import annotations

import pytest

from siwes_portal.auth.model import Identity
from siwes_portal.core.enums import Role, SessionState
from siwes_portal.core.exceptions import ValidationError
from siwes_portal.profiles.model import Profile
from siwes_portal.session.model import PortalSession
from siwes_portal.session.router import SessionRouter, state_for_role


@pytest.mark.parametrize(
    "role,state,endpoint",
    [
        (Role.STUDENT, SessionState.STUDENT, "student_dashboard"),
        (Role.ADMIN, SessionState.ADMIN, "admin_dashboard"),
        (Role.GUEST, SessionState.GUEST, "student_dashboard"),
    ],
)
def test_sign_in_routes_by_role(role, state, endpoint):
    router = SessionRouter()
    resolving = router.begin(Identity(user_id="u-1", email="a@x.com"))
    assert resolving.state == SessionState.RESOLVING
    assert router.target_endpoint(resolving) == "login"

    portal = router.complete(resolving, Profile(user_id="u-1", first_name="Ada", last_name="Obi", role=role))

    assert portal.state == state
    assert portal.is_authenticated
    assert router.target_endpoint(portal) == endpoint


@pytest.mark.parametrize("role", [None, "", "superuser"])
def test_unrecognized_role_routes_to_student(role):
    assert state_for_role(role) == SessionState.STUDENT


def test_complete_requires_a_resolving_session():
    router = SessionRouter()
    profile = Profile(user_id="u-1", first_name="A", last_name="B", role=Role.STUDENT)

    with pytest.raises(ValidationError):
        router.complete(PortalSession(), profile)

    resolving = router.begin(Identity(user_id="u-2", email=None))
    with pytest.raises(ValidationError):
        router.complete(resolving, profile)


def test_sign_out_drops_everything(make_session):
    router = SessionRouter()
    portal = router.sign_out(make_session(SessionState.ADMIN))

    assert portal == PortalSession()
    assert not portal.is_authenticated
    assert router.target_endpoint(portal) == "login"


def test_session_survives_cookie_serialization(make_session):
    portal = make_session(SessionState.STUDENT, student_id="FCP/CCS/20/1234")

    assert PortalSession.from_dict(portal.to_dict()) == portal


def test_tampered_session_state_is_unauthenticated():
    assert PortalSession.from_dict({"state": "root", "user_id": "u-1"}) == PortalSession()
    assert PortalSession.from_dict(None) == PortalSession()

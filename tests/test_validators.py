from __future__ import annotations

import pytest

from siwes_portal.common.validators import (
    require_email,
    require_matching_passwords,
    require_min_length,
    require_non_empty,
    require_student_id,
    student_email,
)
from siwes_portal.core.exceptions import ValidationError


def test_student_id_is_normalized_before_matching():
    assert require_student_id("  fcp/ccs/20/1234 ") == "FCP/CCS/20/1234"


@pytest.mark.parametrize("value", ["FCP/CCS/2/1234", "FCP/CCS/20/123", "ABC/CCS/20/1234", "FCP-CCS-20-1234"])
def test_malformed_student_ids_are_rejected(value):
    with pytest.raises(ValidationError, match="Invalid student ID format"):
        require_student_id(value)


def test_blank_student_id_is_required():
    with pytest.raises(ValidationError, match="Student ID is required"):
        require_student_id("   ")


def test_student_email_is_synthesized_from_the_id():
    assert student_email("FCP/CCS/20/1234", "fud.edu.ng") == "fcp-ccs-20-1234@student.fud.edu.ng"


def test_email_is_trimmed_and_lowercased():
    assert require_email("  Admin@FUD.edu.NG ") == "admin@fud.edu.ng"

    with pytest.raises(ValidationError):
        require_email("not-an-email")


def test_password_rules():
    assert require_min_length("abcd", "Password", 4) == "abcd"
    with pytest.raises(ValidationError, match="at least 4"):
        require_min_length("abc", "Password", 4)
    with pytest.raises(ValidationError, match="Passwords do not match"):
        require_matching_passwords("abcd", "abce")
    with pytest.raises(ValidationError, match="First name is required"):
        require_non_empty("  ", "First name")

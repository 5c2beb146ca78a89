from __future__ import annotations

import re

from ..core.constants import DEFAULT_STUDENT_ID_PATTERN, STUDENT_ID_EXAMPLE
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_matching_passwords(password: str, confirm_password: str) -> str:
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    return password


def normalize_student_id(value: str) -> str:
    return (value or "").strip().upper()


def require_student_id(value: str, pattern: str = DEFAULT_STUDENT_ID_PATTERN) -> str:
    student_id = normalize_student_id(value)
    if not student_id:
        raise ValidationError("Student ID is required")
    if not re.fullmatch(pattern, student_id):
        raise ValidationError(f"Invalid student ID format. Use the format {STUDENT_ID_EXAMPLE}")
    return student_id


def student_email(student_id: str, domain: str) -> str:
    """Synthetic sign-in email for a student id.

    FCP/CCS/20/1234 + fud.edu.ng -> fcp-ccs-20-1234@student.fud.edu.ng
    """
    local = normalize_student_id(student_id).replace("/", "-").lower()
    return f"{local}@student.{domain.strip().lower()}"


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", email):
        raise ValidationError("Invalid email address")
    return email

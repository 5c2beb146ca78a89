from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import DomainError
from ..session.guards import admin_required, current_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service

    @app.route("/admin/students", endpoint="admin_students")
    @admin_required
    def admin_students():
        query = request.args.get("q", "").strip()
        students = []
        try:
            students = profiles.list_students(query)
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "admin/students.html",
            students=students,
            query=query,
            active_page="admin_students",
        )

    @app.route("/admin/students/<user_id>", methods=["POST"], endpoint="admin_update_student")
    @admin_required
    def admin_update_student(user_id: str):
        try:
            profiles.update_profile(
                current_session(),
                user_id=user_id,
                first_name=request.form.get("first_name", ""),
                last_name=request.form.get("last_name", ""),
            )
            flash("Student updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Unexpected error while updating student %s", user_id)
            flash("System error while updating the student", "danger")
        return redirect(url_for("admin_students", q=request.args.get("q") or None))

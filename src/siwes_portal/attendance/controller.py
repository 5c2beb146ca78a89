from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import (
    AuthorizationError,
    ExternalServiceError,
    GeolocationError,
    ValidationError,
)
from ..session.guards import attendee_required, current_session, store_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    recorder = container.attendance_recorder

    @app.route("/student", endpoint="student_dashboard")
    @attendee_required
    def student_dashboard():
        portal = current_session()
        today_record = None
        history = []
        assignment = None
        try:
            today_record = recorder.today_record(portal.user_id)
            history = recorder.history(portal.user_id)
            assignment = container.location_service.for_student(portal.student_id)
        except ExternalServiceError as e:
            # Render what we can; the check-in button still works.
            logger.warning("Dashboard data unavailable for %s: %s", portal.user_id, e)
            flash(str(e), "warning")

        return render_template(
            "student/dashboard.html",
            portal=portal,
            today_record=today_record,
            checked_in_today=today_record is not None,
            history=history,
            assignment=assignment,
            active_page="student_dashboard",
        )

    @app.route("/student/profile", methods=["POST"], endpoint="student_profile")
    @attendee_required
    def student_profile():
        portal = current_session()
        try:
            profile = container.profile_service.update_profile(
                portal,
                user_id=portal.user_id,
                first_name=request.form.get("first_name", ""),
                last_name=request.form.get("last_name", ""),
            )
            store_session(
                portal.evolve(first_name=profile.first_name, last_name=profile.last_name)
            )
            flash("Profile updated.", "success")
        except (ValidationError, AuthorizationError, ExternalServiceError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Unexpected error while updating profile %s", portal.user_id)
            flash("System error while updating your profile", "danger")
        return redirect(url_for("student_dashboard"))

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @attendee_required
    def api_check_in():
        portal = current_session()
        payload = request.get_json(silent=True) or {}
        try:
            position = recorder.read_fix(payload)
            result = recorder.check_in(portal, position)
        except GeolocationError as e:
            return jsonify({"success": False, "code": int(e.code), "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ExternalServiceError as e:
            return jsonify({"success": False, "message": str(e)}), 502
        except Exception:
            logger.exception("Unexpected error during check-in for %s", portal.user_id)
            return jsonify({"success": False, "message": "System error during check-in"}), 500

        return jsonify(
            {
                "success": True,
                "already_checked_in": result.already_checked_in,
                "celebrate": not result.already_checked_in,
                "message": result.message,
                "record": result.record.to_dict(),
            }
        ), 200

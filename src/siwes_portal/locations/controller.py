from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import DomainError
from ..session.guards import admin_required, current_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    locations = container.location_service

    @app.route("/admin/locations", methods=["GET", "POST"], endpoint="admin_locations")
    @admin_required
    def admin_locations():
        if request.method == "POST":
            try:
                _, created = locations.assign(
                    current_session(),
                    student_id=request.form.get("student_id", ""),
                    location=request.form.get("location", ""),
                    company=request.form.get("company"),
                    address=request.form.get("address"),
                    supervisor=request.form.get("supervisor"),
                    phone=request.form.get("phone"),
                )
                flash("Location assigned." if created else "Location updated.", "success")
                return redirect(url_for("admin_locations"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Unexpected error while assigning a location")
                flash("System error while assigning the location", "danger")

        rows = []
        try:
            rows = locations.list_with_names()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template("admin/locations.html", rows=rows, active_page="admin_locations")

    @app.route("/admin/locations/<int:location_id>/delete", methods=["POST"], endpoint="admin_delete_location")
    @admin_required
    def admin_delete_location(location_id: int):
        try:
            locations.remove(current_session(), location_id)
            flash("Location removed.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Unexpected error while removing location %s", location_id)
            flash("System error while removing the location", "danger")
        return redirect(url_for("admin_locations"))

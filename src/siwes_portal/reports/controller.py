from __future__ import annotations

import io
import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, send_file, url_for

from ..container import Container
from ..core.constants import RECENT_RECORDS_LIMIT
from ..core.exceptions import DomainError, ExternalServiceError
from ..session.guards import admin_required, current_session
from .csv_export import export_filename

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    reports = container.aggregation_service
    recorder = container.attendance_recorder

    def _overview():
        try:
            return reports.overview(recorder.today())
        except ExternalServiceError as e:
            flash(str(e), "danger")
            return None

    @app.route("/admin", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return render_template("admin/overview.html", overview=_overview(), active_page="admin_dashboard")

    @app.route("/admin/analytics", endpoint="admin_analytics")
    @admin_required
    def admin_analytics():
        return render_template("admin/analytics.html", overview=_overview(), active_page="admin_analytics")

    @app.route("/admin/check-ins", endpoint="admin_check_ins")
    @admin_required
    def admin_check_ins():
        records = []
        count = 0
        try:
            records = reports.recent_records()
            count = reports.count_for_date(recorder.today())
        except ExternalServiceError as e:
            flash(str(e), "danger")
        return render_template(
            "admin/checkins.html",
            records=records,
            today_count=count,
            last_id=max((r.record_id for r in records), default=0),
            active_page="admin_check_ins",
        )

    @app.route("/admin/check-ins/export.csv", endpoint="admin_export_csv")
    @admin_required
    def admin_export_csv():
        try:
            content = reports.export_csv(reports.recent_records())
        except ExternalServiceError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_check_ins"))

        if content is None:
            flash("No Data: No attendance records to export.", "warning")
            return redirect(url_for("admin_check_ins"))

        return send_file(
            io.BytesIO(content.encode("utf-8")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=export_filename(recorder.today()),
        )

    @app.route("/admin/check-ins/clear", methods=["POST"], endpoint="admin_clear_check_ins")
    @admin_required
    def admin_clear_check_ins():
        try:
            deleted = reports.clear_all(current_session())
            flash(f"Cleared {deleted} attendance record(s).", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Unexpected error while clearing attendance records")
            flash("System error while clearing attendance records", "danger")
        return redirect(url_for("admin_check_ins"))

    @app.route("/api/admin/check-ins/feed", endpoint="api_check_in_feed")
    @admin_required
    def api_check_in_feed():
        try:
            after = int(request.args.get("after", 0))
        except (TypeError, ValueError):
            after = 0
        try:
            records = reports.records_after(after, RECENT_RECORDS_LIMIT)
            today = reports.count_for_date(recorder.today())
        except ExternalServiceError as e:
            return jsonify({"success": False, "message": str(e)}), 502

        return jsonify(
            {
                "success": True,
                "records": [r.to_dict() for r in records],
                "last_id": max((r.record_id for r in records), default=after),
                "today_count": today,
            }
        )

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_id
from ..common.web import api_view, current_user_id, json_body
from ..geo.location import ClientReportedLocation
from .service import parse_shift_type


def register(app: Flask, container) -> None:
    def _team_id(user_id: int):
        team = container.user_service.get_user_team(user_id)
        return team.team_id if team else None

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @api_view
    def checkin():
        user_id = current_user_id()
        data = json_body()
        shift_type = parse_shift_type(data.get("shift_type"))

        record_id = container.attendance_service.check_in(
            user_id,
            _team_id(user_id),
            shift_type,
            location_provider=ClientReportedLocation(data.get("location")),
        )
        return jsonify({"success": True, "record_id": record_id, "message": "Chấm công thành công"}), 200

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @api_view
    def checkout():
        user_id = current_user_id()
        data = json_body()
        record_id = require_positive_id(data.get("record_id"), "Bản ghi chấm công")

        container.attendance_service.check_out(
            user_id,
            _team_id(user_id),
            record_id,
            location_provider=ClientReportedLocation(data.get("location")),
        )
        return jsonify({"success": True, "message": "Đã chấm công ra ca thành công."}), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @api_view
    def today():
        user_id = current_user_id()
        shifts = container.attendance_service.today_view(user_id, _team_id(user_id))
        return jsonify({"success": True, "shifts": shifts})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @api_view
    def stats():
        user_id = current_user_id()
        month = request.args.get("month")
        reference = parse_iso_date(f"{month}-01") if month else None
        result = container.attendance_service.monthly_stats(user_id, reference=reference)
        return jsonify({"success": True, "stats": result.as_dict()})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @api_view
    def history():
        user_id = current_user_id()
        period = request.args.get("period", "week")
        rows = container.attendance_service.history(user_id, period=period)
        return jsonify({"success": True, "period": period, "records": rows})

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_month
from ..container import Container
from ..staff.serializers import entry_to_dict, staff_brief


def register(app: Flask, container: Container) -> None:
    presence = container.presence_service
    staff_svc = container.staff_service

    @app.route("/api/presence", methods=["GET"], endpoint="presence_today")
    def presence_today():
        summary = presence.split_today(staff_svc.list(request.args.get("ownerId")))
        return jsonify(
            {
                "total": summary.total,
                "present": len(summary.present),
                "absent": len(summary.absent),
                "present_staff": [staff_brief(s) for s in summary.present],
                "absent_staff": [staff_brief(s) for s in summary.absent],
            }
        )

    @app.route("/api/staff/<int:staff_id>/attendance", methods=["GET"], endpoint="attendance_for_date")
    def attendance_for_date(staff_id: int):
        raw = request.args.get("date")
        day = parse_iso_date(raw) if raw else now_local().date()
        detail = presence.day_detail(staff_svc.get(staff_id), day)
        return jsonify(
            {
                "date": detail.day.isoformat(),
                "present": detail.present,
                "entries": [entry_to_dict(e) for e in detail.entries],
            }
        )

    @app.route("/api/staff/<int:staff_id>/calendar", methods=["GET"], endpoint="attendance_calendar")
    def attendance_calendar(staff_id: int):
        raw = request.args.get("month")
        year, month = parse_month(raw) if raw else (now_local().year, now_local().month)
        dates = presence.present_dates(staff_svc.get(staff_id), year, month)
        return jsonify({"month": f"{year:04d}-{month:02d}", "present_dates": [d.isoformat() for d in dates]})

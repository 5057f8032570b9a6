from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_month
from ..container import Container


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service
    staff_svc = container.staff_service

    def _selected_month() -> tuple[int, int]:
        raw = request.args.get("month")
        if raw:
            return parse_month(raw)
        today = now_local()
        return today.year, today.month

    @app.route("/api/payroll", methods=["GET"], endpoint="monthly_payroll")
    def monthly_payroll():
        year, month = _selected_month()
        staff = staff_svc.list(request.args.get("ownerId"), search=request.args.get("q"))
        report = payroll.build_monthly_report(staff, year=year, month=month)
        return jsonify(
            {
                "month": f"{year:04d}-{month:02d}",
                "rows": [
                    {
                        "staff_id": r.staff_id,
                        "name": r.name,
                        "daily_rate": r.daily_rate,
                        "days": r.days,
                        "total": r.total,
                    }
                    for r in report.rows
                ],
                "grand_total": report.grand_total,
            }
        )

    @app.route("/api/staff/<int:staff_id>/payroll", methods=["GET"], endpoint="staff_payroll")
    def staff_payroll(staff_id: int):
        year, month = _selected_month()
        line = payroll.monthly_for_staff(staff_svc.get(staff_id), year=year, month=month)
        return jsonify({"month": f"{year:04d}-{month:02d}", "days": line.days, "total": line.total})

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import request_data, uploaded_file
from ..container import Container
from .serializers import staff_to_dict


def register(app: Flask, container: Container) -> None:
    svc = container.staff_service

    @app.route("/api/staff", methods=["GET"], endpoint="list_staff")
    def list_staff():
        staff = svc.list(request.args.get("ownerId"), search=request.args.get("q"))
        return jsonify([staff_to_dict(s) for s in staff])

    @app.route("/api/staff/<int:staff_id>", methods=["GET"], endpoint="get_staff")
    def get_staff(staff_id: int):
        return jsonify(staff_to_dict(svc.get(staff_id)))

    @app.route("/api/staff", methods=["POST"], endpoint="add_staff")
    def add_staff():
        data = request_data()
        staff = svc.add(
            owner_id=data.get("ownerId", ""),
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            daily_rate=data.get("dailyRate"),
            profile_picture=uploaded_file("profilePic"),
        )
        return jsonify(staff_to_dict(staff))

    @app.route("/api/staff/<int:staff_id>", methods=["PUT"], endpoint="update_staff")
    def update_staff(staff_id: int):
        data = request_data()
        staff = svc.update(
            staff_id,
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            daily_rate=data.get("dailyRate"),
        )
        return jsonify(staff_to_dict(staff))

    @app.route("/api/staff/<int:staff_id>", methods=["DELETE"], endpoint="delete_staff")
    def delete_staff(staff_id: int):
        svc.remove(staff_id, owner_id=request.args.get("ownerId"))
        return jsonify({"message": "Deleted"})

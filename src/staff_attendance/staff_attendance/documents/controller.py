from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import request_data, uploaded_file
from ..container import Container
from ..staff.serializers import staff_to_dict


def register(app: Flask, container: Container) -> None:
    svc = container.document_service

    @app.route("/api/staff/<int:staff_id>/documents", methods=["POST"], endpoint="upload_document")
    def upload_document(staff_id: int):
        staff = svc.upload(staff_id, uploaded_file("file"), name=request_data().get("name"))
        return jsonify(staff_to_dict(staff))

    @app.route("/api/staff/<int:staff_id>/documents/<int:document_id>", methods=["DELETE"], endpoint="delete_document")
    def delete_document(staff_id: int, document_id: int):
        return jsonify(staff_to_dict(svc.delete(staff_id, document_id)))

from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import request

from ..staff.service import UploadedFile


def request_data() -> Mapping[str, Any]:
    """JSON body or form fields, whichever the client sent."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form


def uploaded_file(field: str) -> Optional[UploadedFile]:
    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    return UploadedFile(filename=storage.filename, data=storage.read())

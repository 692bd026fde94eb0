from typing import Any, Optional

from flask import jsonify


def handle_response(status_code: int, message: str, data: Optional[Any] = None):
    """Build the standard ``{"message", "data"}`` JSON response."""
    return jsonify({"message": message, "data": data if data is not None else {}}), status_code

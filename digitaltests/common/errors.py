"""
Uniform (status, message) errors and the terminal handler that renders them.
"""
from flask import Flask, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from digitaltests.common.i18n import t


class HttpError(Exception):
    """An error that maps directly to an HTTP status and a localized message."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:  # pragma: no cover
        return f"<HttpError {self.status}: {self.message}>"


def register_error_handlers(app: Flask) -> None:
    """Funnel every error raised by a view into a JSON {message} response."""

    @app.errorhandler(HttpError)
    def handle_http_error(error: HttpError):
        return jsonify({"message": error.message}), error.status

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error: SQLAlchemyError):
        from digitaltests import db
        db.session.rollback()
        current_app.logger.error(f"Database error: {error}")
        return jsonify({"message": t("Common.server_error")}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({"message": error.description}), error.code
        current_app.logger.exception(f"Unhandled error: {error}")
        return jsonify({"message": t("Common.server_error")}), 500

"""
Security logging module.

This module provides specialized logging for security events
such as failed logins, password resets and unauthorized access.
"""

from flask import request, current_app
from datetime import datetime


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(identifier: str, reason: str = "Invalid credentials"):
        """
        Log a failed login attempt.

        Args:
            identifier: Email or username used in the login attempt
            reason: Reason for failure
        """
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Identifier: {identifier}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, identifier: str):
        """
        Log a successful login.

        Args:
            user_id: User ID
            identifier: User email or username
        """
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Identifier: {identifier}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_unauthorized_access(resource: str, user_id: int = None):
        """
        Log unauthorized access attempt.

        Args:
            resource: Resource that was accessed
            user_id: User ID if authenticated
        """
        user_info = f"User ID: {user_id}" if user_id else "Unauthenticated"
        current_app.logger.warning(
            f"SECURITY: Unauthorized access - {user_info}, "
            f"Resource: {resource}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_password_change(user_id: int, email: str):
        """Log a password reset."""
        current_app.logger.info(
            f"SECURITY: Password changed - User ID: {user_id}, "
            f"Email: {email}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_account_deleted(user_id: int):
        current_app.logger.info(
            f"SECURITY: Account deleted - User ID: {user_id}, "
            f"IP: {request.remote_addr}, Time: {datetime.utcnow().isoformat()}"
        )

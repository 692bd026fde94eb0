"""
Security headers module.

Adds security headers to every API response.
"""

from flask import current_app


class SecurityHeaders:
    """
    Security headers middleware.

    The API only serves JSON (and plain-text 404 bodies), so the policy
    forbids loading anything at all.
    """

    @staticmethod
    def init_app(app):
        """
        Initialize security headers for the Flask app.

        Args:
            app: Flask application instance
        """
        @app.after_request
        def add_security_headers(response):
            """Add security headers to all responses."""
            response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

            # X-Content-Type-Options: Prevent MIME type sniffing
            response.headers['X-Content-Type-Options'] = 'nosniff'

            # X-Frame-Options: Prevent clickjacking
            response.headers['X-Frame-Options'] = 'DENY'

            # Referrer-Policy: Control referrer information
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

            # Strict-Transport-Security: only when cookies travel over HTTPS
            if current_app.config.get('SESSION_COOKIE_SECURE', False):
                response.headers['Strict-Transport-Security'] = (
                    'max-age=31536000; includeSubDomains'
                )

            if 'Server' in response.headers:
                del response.headers['Server']

            return response

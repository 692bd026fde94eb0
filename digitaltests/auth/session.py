"""
Cookie session: the ``access_token`` cookie carries a signed user id and
Flask-Login resolves ``current_user`` from it on every request.
"""
from datetime import datetime, timedelta

from flask import Request
from flask_login import LoginManager

from digitaltests.auth.tokens import TokenExpired, TokenInvalid, create_access_token, verify_access_token
from digitaltests.config import config


def init_session(login_manager: LoginManager) -> None:

    @login_manager.user_loader
    def load_user(user_id):
        from digitaltests import db
        from digitaltests.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.request_loader
    def load_user_from_cookie(request: Request):
        from digitaltests import db
        from digitaltests.auth.models import User
        token = request.cookies.get(config.ACCESS_TOKEN_COOKIE)
        if not token:
            return None
        try:
            user_id = verify_access_token(token)
        except (TokenExpired, TokenInvalid):
            return None
        return db.session.get(User, user_id)


def issue_session_cookie(response, user_id: int) -> None:
    """Attach a long-lived, HTTP-only session cookie for the user."""
    response.set_cookie(
        config.ACCESS_TOKEN_COOKIE,
        create_access_token(user_id),
        expires=datetime.utcnow() + timedelta(days=config.ACCESS_TOKEN_MAX_AGE_DAYS),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite=config.SESSION_COOKIE_SAMESITE,
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(
        config.ACCESS_TOKEN_COOKIE,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite=config.SESSION_COOKIE_SAMESITE,
    )

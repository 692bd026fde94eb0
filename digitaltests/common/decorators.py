from functools import wraps

from flask import jsonify, request
from flask_login import current_user

from digitaltests.common.context import AuthContext
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import t
from digitaltests.config import config


def current_context() -> AuthContext:
    """The authenticated caller as an explicit context value."""
    return AuthContext.from_user(current_user)


def login_required(f):
    """Decorator to require a valid session cookie for a route."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            if request.cookies.get(config.ACCESS_TOKEN_COOKIE):
                raise HttpError(401, t("Auth.middleware.invalid_or_expired_token"))
            raise HttpError(401, t("Auth.middleware.not_logged_in"))
        return f(*args, **kwargs)
    return decorated_function


def active_required(f):
    """Decorator to require a logged-in user whose account is activated."""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not current_user.active:
            raise HttpError(403, t("Auth.middleware.account_inactive"))
        return f(*args, **kwargs)
    return decorated_function


def logged_out_required(f):
    """
    Decorator for routes that only make sense without a session.
    A stale cookie is cleared on the rejection so the next attempt goes through.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if request.cookies.get(config.ACCESS_TOKEN_COOKIE):
            from digitaltests.auth.session import clear_session_cookie
            response = jsonify({"message": t("Auth.middleware.already_logged_in")})
            clear_session_cookie(response)
            return response, 401
        return f(*args, **kwargs)
    return decorated_function

from flask import current_app, request

from digitaltests import db
from digitaltests.auth import auth_bp
from digitaltests.auth.email_service import send_email
from digitaltests.auth.models import User
from digitaltests.auth.session import clear_session_cookie, issue_session_cookie
from digitaltests.auth.tokens import TokenExpired, TokenInvalid, create_reset_token, verify_reset_token
from digitaltests.auth.utils import hash_password, normalize_email, validate_password, verify_password
from digitaltests.common.decorators import logged_out_required, login_required
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import negotiate_locale, t
from digitaltests.common.responses import handle_response
from digitaltests.config import config
from digitaltests.security import SecurityLogger


@auth_bp.route("/login", methods=["POST"])
@logged_out_required
def login():
    """
    Log in with email or username and password.
    The account does not need to be active to log in.
    """
    data = request.get_json(silent=True) or {}
    password = data.get("password")
    email = normalize_email(data.get("email"))
    username = data.get("username").strip() if isinstance(data.get("username"), str) else ""

    if not password or not isinstance(password, str):
        raise HttpError(400, t("Auth.Service.password_required"))
    if not email and not username:
        raise HttpError(400, t("Auth.Service.email_or_username_required"))

    if email:
        identifier = email
        user = User.query.filter_by(email=email).first()
        if not user:
            SecurityLogger.log_failed_login(identifier, "Unknown email")
            raise HttpError(404, t("Auth.Service.invalid_email"))
    else:
        identifier = username
        user = User.query.filter_by(username=username).first()
        if not user:
            SecurityLogger.log_failed_login(identifier, "Unknown username")
            raise HttpError(404, t("Auth.Service.invalid_username"))

    if not verify_password(password, user.password_hash):
        SecurityLogger.log_failed_login(identifier, "Wrong password")
        raise HttpError(401, t("Auth.Service.invalid_password"))

    SecurityLogger.log_successful_login(user.id, identifier)

    response, status = handle_response(200, t("Auth.login_success"), user.to_dict())
    issue_session_cookie(response, user.id)
    return response, status


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    response, status = handle_response(200, t("Auth.logout_success"))
    clear_session_cookie(response)
    return response, status


@auth_bp.route("/forget-password", methods=["POST"])
def forget_password():
    """Email a short-lived password reset link to an active account."""
    data = request.get_json(silent=True) or {}
    email = normalize_email(data.get("email"))
    if not email:
        raise HttpError(400, t("Auth.email_required"))

    user = User.query.filter_by(email=email).first()
    if not user:
        raise HttpError(409, t("Auth.user_not_found_register"))
    if not user.active:
        raise HttpError(403, t("Auth.user_inactive"))

    token = create_reset_token(email)
    send_email(
        email,
        "forget_password",
        negotiate_locale(),
        {"name": user.name, "token": token, "frontend_url": config.FRONTEND_URL},
    )

    return handle_response(200, t("Auth.check_email_reset_password"))


@auth_bp.route("/reset-password", methods=["PUT"])
def reset_password():
    data = request.get_json(silent=True) or {}
    token = data.get("token")
    password = data.get("password")

    if not validate_password(password):
        raise HttpError(400, t("Auth.password_length"))

    if not token or not isinstance(token, str):
        raise HttpError(401, t("Auth.invalid_or_expired_token"))
    try:
        email = verify_reset_token(token)
    except (TokenExpired, TokenInvalid):
        raise HttpError(401, t("Auth.invalid_or_expired_token"))

    user = User.query.filter_by(email=email).first()
    if not user:
        raise HttpError(400, t("Auth.invalid_token_or_user_not_found"))

    user.password_hash = hash_password(password)
    db.session.commit()

    SecurityLogger.log_password_change(user.id, user.email)
    current_app.logger.info(f"Password reset for user {user.id}")

    send_email(
        user.email,
        "reset_password_success",
        negotiate_locale(),
        {"name": user.name, "frontend_url": config.FRONTEND_URL},
    )

    return handle_response(200, t("Auth.password_reset_success"))

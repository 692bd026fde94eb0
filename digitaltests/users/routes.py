from flask import current_app, request
from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from digitaltests import db
from digitaltests.auth.email_service import send_email
from digitaltests.auth.models import User
from digitaltests.auth.session import clear_session_cookie
from digitaltests.auth.tokens import TokenExpired, TokenInvalid, create_activation_token, verify_activation_token
from digitaltests.auth.utils import (
    USERNAME_REGEX,
    hash_password,
    is_valid_email,
    normalize_email,
    validate_registration,
)
from digitaltests.common.context import ROLE_USER
from digitaltests.common.decorators import logged_out_required, login_required
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import negotiate_locale, t
from digitaltests.common.responses import handle_response
from digitaltests.config import config
from digitaltests.security import SecurityLogger
from digitaltests.users import users_bp


def _send_activation_email(user: User, async_send=None):
    token = create_activation_token(user.id)
    return send_email(
        user.email,
        "activation",
        negotiate_locale(),
        {"name": user.name, "token": token, "frontend_url": config.FRONTEND_URL},
        async_send=async_send,
    )


@users_bp.route("/register", methods=["POST"])
@logged_out_required
def register():
    data = request.get_json(silent=True) or {}

    error = validate_registration(data)
    if error:
        raise HttpError(400, error)

    name = data["name"].strip()
    username = data.get("username").strip() if isinstance(data.get("username"), str) else ""
    username = username or None
    email = normalize_email(data.get("email"))

    if username and User.query.filter_by(username=username).first():
        raise HttpError(409, t("User.username_exists"))
    if email and User.query.filter_by(email=email).first():
        raise HttpError(409, t("User.email_exists"))

    user = User(
        name=name,
        username=username,
        email=email,
        password_hash=hash_password(data["password"]),
        role=ROLE_USER,
        active=False,
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same identity
        db.session.rollback()
        raise HttpError(409, t("User.email_exists") if email else t("User.username_exists"))

    current_app.logger.info(f"Registered user {user.id}")

    if email:
        _send_activation_email(user)
        return handle_response(201, t("User.registration_success_email"))

    return handle_response(201, t("User.registration_success_username"))


@users_bp.route("/activate", methods=["GET"])
def activate():
    token = request.args.get("token")
    if not token:
        raise HttpError(400, t("User.activation_token_required"))

    try:
        user_id = verify_activation_token(token)
    except TokenExpired:
        raise HttpError(401, t("User.token_expired"))
    except TokenInvalid:
        raise HttpError(401, t("User.token_invalid"))

    user = db.session.get(User, user_id)
    if not user:
        raise HttpError(404, t("User.user_not_found"))

    if user.active:
        return handle_response(200, t("User.account_already_active"))

    user.active = True
    db.session.commit()
    current_app.logger.info(f"Activated user {user.id}")

    if user.email:
        send_email(
            user.email,
            "activation_success",
            negotiate_locale(),
            {"name": user.name, "frontend_url": config.FRONTEND_URL},
        )

    return handle_response(200, t("User.account_activated_successfully"), user.to_dict())


@users_bp.route("/resend-activation-email", methods=["POST"])
def resend_activation_email():
    data = request.get_json(silent=True) or {}
    email = normalize_email(data.get("email"))
    if not email:
        raise HttpError(400, t("User.email_required"))

    user = User.query.filter_by(email=email).first()
    if not user:
        raise HttpError(404, t("User.user_not_found_with_email"))
    if user.active:
        raise HttpError(400, t("User.account_already_active"))

    _send_activation_email(user)
    return handle_response(200, t("User.resend_activation_email_success"))


@users_bp.route("/user", methods=["GET"])
@login_required
def get_user():
    return handle_response(200, t("User.user_retrieved_successfully"), current_user.to_dict())


@users_bp.route("/update-user", methods=["PUT"])
@login_required
def update_user():
    """
    Update name, username and/or email.
    A new email deactivates the account until it is activated again; if the
    activation email cannot be sent nothing is saved.
    """
    data = request.get_json(silent=True) or {}
    user = db.session.get(User, current_user.id)

    name = data.get("name")
    if isinstance(name, str) and name.strip():
        name = name.strip()
        if not 2 <= len(name) <= 50:
            raise HttpError(400, t("Validation.RegisterValidation.name_length"))
        user.name = name

    username = data.get("username")
    if isinstance(username, str) and username.strip():
        username = username.strip()
        if not 3 <= len(username) <= 30:
            raise HttpError(400, t("Validation.RegisterValidation.username_length"))
        if not USERNAME_REGEX.match(username):
            raise HttpError(400, t("Validation.RegisterValidation.username_format"))
        existing = User.query.filter(User.username == username, User.id != user.id).first()
        if existing:
            db.session.rollback()
            raise HttpError(409, t("User.username_exists"))
        user.username = username

    email = normalize_email(data.get("email"))
    email_changed = bool(email) and email != user.email
    if email_changed:
        if not is_valid_email(email):
            db.session.rollback()
            raise HttpError(400, t("Validation.RegisterValidation.invalid_email"))
        existing = User.query.filter(User.email == email, User.id != user.id).first()
        if existing:
            db.session.rollback()
            raise HttpError(409, t("User.email_exists"))
        user.email = email
        user.active = False

        ok, error = _send_activation_email(user, async_send=False)
        if not ok:
            db.session.rollback()
            current_app.logger.error(f"Activation email for user {user.id} failed: {error}")
            raise HttpError(500, t("User.email_sending_failed"))

    db.session.commit()
    current_app.logger.info(f"Updated user {user.id}")

    return handle_response(200, t("User.user_updated_successfully"), user.to_dict())


@users_bp.route("/delete-account", methods=["DELETE"])
@login_required
def delete_account():
    """Delete the account with its quizzes, library and scores in one transaction."""
    user = db.session.get(User, current_user.id)
    user_id, name, email = user.id, user.name, user.email

    db.session.delete(user)
    db.session.commit()

    SecurityLogger.log_account_deleted(user_id)

    if email:
        send_email(email, "account_deleted", negotiate_locale(), {"name": name, "frontend_url": config.FRONTEND_URL})

    response, status = handle_response(200, t("User.account_deleted_successfully"))
    clear_session_cookie(response)
    return response, status

"""
Quiz ownership and library operations.

Every operation takes the caller's AuthContext explicitly and raises
HttpError for anything the caller may not do.
"""
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from digitaltests import db
from digitaltests.auth.models import User
from digitaltests.auth.tokens import TokenExpired, TokenInvalid, create_share_token, verify_share_token
from digitaltests.common.context import AuthContext
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import VISIBILITY_LABELS, negotiate_locale, t
from digitaltests.common.parsing import is_blank, is_positive_number, parse_id
from digitaltests.config import config
from digitaltests.quiz.models import VISIBILITIES, VISIBILITY_PRIVATE, VISIBILITY_PUBLIC, LibraryEntry, Quiz
from digitaltests.security import SecurityLogger


def shows_answers(ctx: Optional[AuthContext], quiz: Quiz) -> bool:
    """Owners always see correct options; everyone else only when configured."""
    if ctx is not None and quiz.is_owned_by(ctx.user_id):
        return True
    return config.INCLUDE_CORRECT_OPTIONS


def get_quiz_or_404(quiz_id, message_key: str = "Quiz.quiz_not_found") -> Quiz:
    quiz_id = parse_id(quiz_id)
    quiz = db.session.get(Quiz, quiz_id) if quiz_id is not None else None
    if quiz is None:
        raise HttpError(404, t(message_key))
    return quiz


def require_owner(ctx: AuthContext, quiz: Quiz, message_key: str) -> None:
    if not quiz.is_owned_by(ctx.user_id):
        SecurityLogger.log_unauthorized_access(f"quiz:{quiz.id}", ctx.user_id)
        raise HttpError(403, t(message_key))


def _caller(ctx: AuthContext) -> User:
    user = db.session.get(User, ctx.user_id)
    if user is None:
        raise HttpError(401, t("Auth.middleware.invalid_or_expired_token"))
    return user


# Quizzes

def create_quiz(ctx: AuthContext, data: dict) -> Quiz:
    title = data.get("title")
    description = data.get("description")
    time = data.get("time")
    visibility = data.get("visibility", VISIBILITY_PRIVATE)

    if not isinstance(title, str) or not title.strip():
        raise HttpError(400, t("Quiz.title_required"))
    if not isinstance(description, str) or not description.strip():
        raise HttpError(400, t("Quiz.description_required"))
    if not is_positive_number(time):
        raise HttpError(400, t("Quiz.time_required"))
    if visibility not in VISIBILITIES:
        raise HttpError(400, t("Quiz.invalid_visibility"))

    owner = _caller(ctx)
    quiz = Quiz(
        title=title.strip(),
        description=description.strip(),
        time=time,
        visibility=visibility,
    )
    owner.quizzes.append(quiz)
    db.session.commit()

    current_app.logger.info(f"User {ctx.user_id} created quiz {quiz.id}")
    return quiz


def list_public_quizzes(page: int, limit: int) -> dict:
    pagination = (
        Quiz.query.filter_by(visibility=VISIBILITY_PUBLIC)
        .order_by(Quiz.id)
        .paginate(page=page, per_page=limit, error_out=False)
    )
    return {
        "totalQuizzes": pagination.total,
        "totalPages": pagination.pages,
        "currentPage": page,
        "quizzes": [
            quiz.to_dict(include_questions=True, include_answers=shows_answers(None, quiz))
            for quiz in pagination.items
        ],
    }


def list_user_quizzes(ctx: AuthContext) -> list[dict]:
    quizzes = Quiz.query.filter_by(user_id=ctx.user_id).order_by(Quiz.id).all()
    return [quiz.to_dict(include_questions=True, include_answers=True) for quiz in quizzes]


def get_quiz(ctx: AuthContext, quiz_id) -> dict:
    quiz = get_quiz_or_404(quiz_id)
    is_owner = quiz.is_owned_by(ctx.user_id)

    if not is_owner and not quiz.is_public():
        SecurityLogger.log_unauthorized_access(f"quiz:{quiz.id}", ctx.user_id)
        raise HttpError(403, t("Quiz.not_authorized_to_access"))

    data = quiz.to_dict(include_questions=True, include_answers=shows_answers(ctx, quiz))
    if is_owner:
        locale = negotiate_locale()
        label = VISIBILITY_LABELS.get(locale, VISIBILITY_LABELS["en"])[quiz.visibility]
        data["visibilityMessage"] = t("Quiz.quiz_visibility_message", locale=locale, visibility=label)
    return data


def _reorder_questions(quiz: Quiz, question_ids) -> None:
    """
    Make the quiz's questions exactly the given ids, in the given order.
    Questions left out are deleted.
    """
    if not isinstance(question_ids, list):
        raise HttpError(400, t("Quiz.invalid_questions"))

    by_id = {question.id: question for question in quiz.questions}
    ordered = []
    for raw_id in question_ids:
        question_id = parse_id(raw_id)
        if question_id not in by_id or by_id[question_id] in ordered:
            raise HttpError(400, t("Quiz.invalid_questions"))
        ordered.append(by_id[question_id])

    for index, question in enumerate(ordered):
        question.order_index = index
    quiz.questions = ordered


def update_quiz(ctx: AuthContext, quiz_id, data: dict) -> Quiz:
    quiz = get_quiz_or_404(quiz_id)
    require_owner(ctx, quiz, "Quiz.not_authorized_to_update")

    title = data.get("title")
    if isinstance(title, str) and title.strip():
        quiz.title = title.strip()

    description = data.get("description")
    if isinstance(description, str) and description.strip():
        quiz.description = description.strip()

    time = data.get("time")
    if is_positive_number(time):
        quiz.time = time

    visibility = data.get("visibility")
    if visibility in VISIBILITIES:
        quiz.visibility = visibility

    if "questions" in data and data["questions"] is not None:
        _reorder_questions(quiz, data["questions"])

    db.session.commit()
    current_app.logger.info(f"User {ctx.user_id} updated quiz {quiz.id}")
    return quiz


def delete_quiz(ctx: AuthContext, quiz_id) -> None:
    """Delete the quiz with its questions, scores and library entries in one transaction."""
    quiz = get_quiz_or_404(quiz_id)
    require_owner(ctx, quiz, "Quiz.not_authorized_to_delete")

    deleted_id = quiz.id
    db.session.delete(quiz)
    db.session.commit()
    current_app.logger.info(f"User {ctx.user_id} deleted quiz {deleted_id}")


def toggle_visibility(ctx: AuthContext, quiz_id) -> Quiz:
    quiz = get_quiz_or_404(quiz_id)
    require_owner(ctx, quiz, "Quiz.not_authorized_to_toggle_visibility")

    quiz.visibility = VISIBILITY_PUBLIC if quiz.visibility == VISIBILITY_PRIVATE else VISIBILITY_PRIVATE
    db.session.commit()
    return quiz


# Library

def get_library(ctx: AuthContext) -> list[dict]:
    user = _caller(ctx)
    return [quiz.to_dict(include_questions=False) for quiz in user.library]


def get_library_quiz(ctx: AuthContext, quiz_id: int) -> dict:
    entry = db.session.get(LibraryEntry, (ctx.user_id, quiz_id))
    if entry is None:
        raise HttpError(404, t("Library.quiz_not_found_in_library"))
    quiz = entry.quiz
    return quiz.to_dict(include_questions=True, include_answers=shows_answers(ctx, quiz))


def remove_from_library(ctx: AuthContext, quiz_id: int) -> list[int]:
    """Remove a quiz from the caller's library; returns the remaining quiz ids."""
    user = _caller(ctx)
    entry = next((e for e in user.library_entries if e.quiz_id == quiz_id), None)
    if entry is None:
        raise HttpError(404, t("Library.quiz_not_found_in_library"))

    user.library_entries.remove(entry)
    db.session.commit()
    return [e.quiz_id for e in user.library_entries]


def share_quiz(ctx: AuthContext, raw_quiz_id) -> str:
    """Mint a share link for one of the caller's own quizzes."""
    if is_blank(raw_quiz_id):
        raise HttpError(400, t("Library.quiz_id_required"))

    quiz_id = parse_id(raw_quiz_id)
    quiz = Quiz.query.filter_by(id=quiz_id, user_id=ctx.user_id).first() if quiz_id is not None else None
    if quiz is None:
        raise HttpError(404, t("Library.quiz_not_found_or_unauthorized"))

    token = create_share_token(quiz.id, ctx.user_id)
    return f"{config.FRONTEND_URL}/dashboard/add-quiz-to-library/{token}"


def _add_to_library(user: User, quiz: Quiz) -> bool:
    """Set-semantics add. Returns False when the quiz was already there."""
    if user.has_in_library(quiz.id):
        return False
    db.session.add(LibraryEntry(user=user, quiz=quiz))
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent request added the same entry first
        db.session.rollback()
        return False
    return True


def add_shared_quiz(ctx: AuthContext, token) -> bool:
    """Redeem a share token. Returns False when the quiz was already in the library."""
    if is_blank(token) or not isinstance(token, str):
        raise HttpError(400, t("Library.token_required"))

    try:
        payload = verify_share_token(token)
    except (TokenExpired, TokenInvalid):
        raise HttpError(401, t("Library.invalid_or_expired_token"))

    if ctx.is_admin:
        raise HttpError(403, t("Library.admin_cannot_add_quiz"))

    quiz = get_quiz_or_404(payload["quiz_id"], "Library.quiz_not_found")
    added = _add_to_library(_caller(ctx), quiz)
    if added:
        current_app.logger.info(
            f"User {ctx.user_id} added quiz {quiz.id} shared by user {payload.get('shared_by_user_id')}"
        )
    return added


def add_public_quiz(ctx: AuthContext, raw_quiz_id) -> str:
    if is_blank(raw_quiz_id):
        raise HttpError(400, t("Library.quiz_id_required"))
    if ctx.is_admin:
        raise HttpError(403, t("Library.admin_cannot_add_quiz"))

    quiz = get_quiz_or_404(raw_quiz_id, "Library.quiz_not_found_or_not_public")
    if not quiz.is_public():
        raise HttpError(404, t("Library.quiz_not_found_or_not_public"))

    _add_to_library(_caller(ctx), quiz)
    return f"{config.FRONTEND_URL}/public-quiz/{quiz.id}"

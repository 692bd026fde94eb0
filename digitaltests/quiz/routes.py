"""
Quiz routes.

Anyone may browse public quizzes; everything else needs a session, and
changing a quiz needs an active account.
"""
from flask import request

from digitaltests.common.decorators import active_required, current_context, login_required
from digitaltests.common.i18n import t
from digitaltests.common.parsing import positive_int_arg
from digitaltests.common.responses import handle_response
from digitaltests.quiz import quiz_bp, service


@quiz_bp.route("/create", methods=["POST"])
@active_required
def create_quiz():
    data = request.get_json(silent=True) or {}
    quiz = service.create_quiz(current_context(), data)
    return handle_response(201, t("Quiz.quiz_created_successfully"), quiz.to_dict(include_answers=True))


@quiz_bp.route("/public", methods=["GET"])
def public_quizzes():
    """
    List public quizzes, paginated.

    Query params:
        page: 1-based page number (default 1)
        limit: page size (default 10)
    """
    page = positive_int_arg(request.args.get("page"), 1)
    limit = positive_int_arg(request.args.get("limit"), 10)
    return handle_response(
        200,
        t("Quiz.public_quizzes_retrieved_successfully"),
        service.list_public_quizzes(page, limit),
    )


@quiz_bp.route("/userQuiz", methods=["GET"])
@login_required
def user_quizzes():
    quizzes = service.list_user_quizzes(current_context())
    return handle_response(200, t("Quiz.user_quizzes_retrieved_successfully"), quizzes)


@quiz_bp.route("/<int:quiz_id>", methods=["GET"])
@login_required
def get_quiz(quiz_id):
    data = service.get_quiz(current_context(), quiz_id)
    return handle_response(200, t("Quiz.quiz_retrieved_successfully"), data)


@quiz_bp.route("/<int:quiz_id>", methods=["PUT"])
@active_required
def update_quiz(quiz_id):
    data = request.get_json(silent=True) or {}
    quiz = service.update_quiz(current_context(), quiz_id, data)
    return handle_response(200, t("Quiz.quiz_updated_successfully"), quiz.to_dict(include_answers=True))


@quiz_bp.route("/<int:quiz_id>", methods=["DELETE"])
@active_required
def delete_quiz(quiz_id):
    service.delete_quiz(current_context(), quiz_id)
    return handle_response(200, t("Quiz.quiz_deleted_successfully"))


@quiz_bp.route("/<int:quiz_id>/toggle-visibility", methods=["PATCH"])
@active_required
def toggle_visibility(quiz_id):
    quiz = service.toggle_visibility(current_context(), quiz_id)
    return handle_response(200, t("Quiz.visibility_toggled_successfully"), {"visibility": quiz.visibility})

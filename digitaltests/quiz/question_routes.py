from flask import request

from digitaltests.common.decorators import active_required, current_context, login_required
from digitaltests.common.i18n import t
from digitaltests.common.responses import handle_response
from digitaltests.quiz import question_bp, question_service


@question_bp.route("/add", methods=["POST"])
@active_required
def add_question():
    data = request.get_json(silent=True) or {}
    question = question_service.add_question(current_context(), data)
    return handle_response(201, t("Question.question_added_successfully"), question.to_dict(include_answer=True))


@question_bp.route("/<int:question_id>", methods=["PUT"])
@active_required
def update_question(question_id):
    data = request.get_json(silent=True) or {}
    question = question_service.update_question(current_context(), question_id, data)
    return handle_response(200, t("Question.question_updated_successfully"), question.to_dict(include_answer=True))


@question_bp.route("/<int:quiz_id>/<int:question_id>", methods=["DELETE"])
@active_required
def delete_question(quiz_id, question_id):
    question_service.delete_question(current_context(), quiz_id, question_id)
    return handle_response(200, t("Question.question_deleted_successfully"))


@question_bp.route("/question/<int:question_id>", methods=["GET"])
@login_required
def get_question(question_id):
    question = question_service.get_question(current_context(), question_id)
    return handle_response(200, t("Question.question_found"), question)


@question_bp.route("/quiz/<int:quiz_id>", methods=["GET"])
@login_required
def get_quiz_questions(quiz_id):
    """Questions of a quiz in their stored order."""
    questions = question_service.get_quiz_questions(current_context(), quiz_id)
    if not questions:
        return handle_response(200, t("Question.no_questions_found"), [])
    return handle_response(200, t("Question.questions_found"), questions)

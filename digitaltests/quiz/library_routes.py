"""
Library routes: the quizzes a user may take, added by share link or from
the public list.
"""
from flask import request

from digitaltests.common.decorators import active_required, current_context, login_required
from digitaltests.common.i18n import t
from digitaltests.common.responses import handle_response
from digitaltests.quiz import quiz_bp, service


@quiz_bp.route("/library", methods=["GET"])
@login_required
def get_library():
    library = service.get_library(current_context())
    return handle_response(200, t("Library.library_retrieved_successfully"), library)


@quiz_bp.route("/library/<int:quiz_id>", methods=["GET"])
@login_required
def get_library_quiz(quiz_id):
    quiz = service.get_library_quiz(current_context(), quiz_id)
    return handle_response(200, t("Library.quiz_retrieved_successfully"), quiz)


@quiz_bp.route("/library/<int:quiz_id>", methods=["DELETE"])
@login_required
def remove_library_quiz(quiz_id):
    remaining = service.remove_from_library(current_context(), quiz_id)
    return handle_response(200, t("Library.quiz_removed_successfully"), {"library": remaining})


@quiz_bp.route("/share-quiz", methods=["POST"])
@active_required
def share_quiz():
    data = request.get_json(silent=True) or {}
    quiz_link = service.share_quiz(current_context(), data.get("quizId"))
    return handle_response(200, t("Library.quiz_link_generated_successfully"), {"quizLink": quiz_link})


@quiz_bp.route("/add-to-library", methods=["POST"])
@active_required
def add_to_library():
    data = request.get_json(silent=True) or {}
    added = service.add_shared_quiz(current_context(), data.get("token"))
    message = t("Library.quiz_added_successfully") if added else t("Library.quiz_already_in_library")
    return handle_response(200, message)


@quiz_bp.route("/library/add-public-quiz", methods=["POST"])
@active_required
def add_public_quiz():
    data = request.get_json(silent=True) or {}
    quiz_link = service.add_public_quiz(current_context(), data.get("quizId"))
    return handle_response(200, t("Library.public_quiz_added_successfully"), {"quizLink": quiz_link})

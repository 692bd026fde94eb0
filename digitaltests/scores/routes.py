from flask import request

from digitaltests.common.decorators import active_required, current_context, login_required
from digitaltests.common.i18n import t
from digitaltests.common.responses import handle_response
from digitaltests.scores import scores_bp, service


@scores_bp.route("/submit", methods=["POST"])
@active_required
def submit_quiz():
    """
    Submit answers for a quiz in the caller's library.

    Request body:
    {
        "quizId": 1,
        "answers": [0, 2, null, 1]  // selected option index per question, in order
    }
    """
    data = request.get_json(silent=True) or {}
    score = service.submit_quiz(current_context(), data)
    return handle_response(201, t("Score.quiz_submitted_successfully"), score.to_dict())


@scores_bp.route("/", methods=["GET"], strict_slashes=False)
@login_required
def list_scores():
    scores = service.list_scores(current_context())
    return handle_response(200, t("Score.scores_retrieved_successfully"), [s.to_dict() for s in scores])


@scores_bp.route("/examiner", methods=["GET"])
@login_required
def examiner_scores():
    scores = service.examiner_scores(current_context())
    return handle_response(
        200,
        t("Score.scores_retrieved_successfully"),
        [s.to_dict(include_user=True) for s in scores],
    )


@scores_bp.route("/<int:score_id>", methods=["GET"])
@login_required
def get_score(score_id):
    score = service.get_score(current_context(), score_id)
    return handle_response(200, t("Score.score_retrieved_successfully"), score.to_dict())


@scores_bp.route("/delete-score", methods=["DELETE"])
@login_required
def delete_score():
    data = request.get_json(silent=True) or {}
    service.delete_score(current_context(), data.get("scoreId"))
    return handle_response(200, t("Score.score_deleted_successfully"))

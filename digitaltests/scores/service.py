"""
Quiz submission and grading.

A user may submit a quiz from their library once. Answers are matched to
the quiz's questions by position.
"""
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from digitaltests import db
from digitaltests.auth.models import User
from digitaltests.common.context import ROLE_USER, AuthContext
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import t
from digitaltests.common.parsing import is_blank, parse_id
from digitaltests.quiz.models import LibraryEntry, Quiz
from digitaltests.scores.models import Score, ScoreAnswer
from digitaltests.security import SecurityLogger


def grade_answers(questions: list, answers: list) -> tuple[int, list[tuple]]:
    """
    Grade answers against questions in order.

    Returns:
        Tuple of (correct count, [(question, selected option, is correct), ...]).
        A missing answer is recorded as None and is never correct.
    """
    correct = 0
    graded = []
    for index, question in enumerate(questions):
        selected: Optional[int] = answers[index] if index < len(answers) else None
        is_correct = question.check_answer(selected)
        if is_correct:
            correct += 1
        graded.append((question, selected, is_correct))
    return correct, graded


def _valid_answers(answers) -> bool:
    return isinstance(answers, list) and all(
        answer is None or (isinstance(answer, int) and not isinstance(answer, bool))
        for answer in answers
    )


def _already_submitted(quiz_id: int, user_id: int) -> bool:
    return Score.query.filter_by(quiz_id=quiz_id, user_id=user_id).first() is not None


def submit_quiz(ctx: AuthContext, data: dict) -> Score:
    raw_quiz_id = data.get("quizId")
    answers = data.get("answers")

    if is_blank(raw_quiz_id):
        raise HttpError(400, t("Score.quiz_id_required"))
    if not _valid_answers(answers):
        raise HttpError(400, t("Score.invalid_answers"))

    if ctx.role != ROLE_USER:
        raise HttpError(403, t("Score.user_only_submission"))

    quiz_id = parse_id(raw_quiz_id)
    entry = db.session.get(LibraryEntry, (ctx.user_id, quiz_id)) if quiz_id is not None else None
    if entry is None:
        raise HttpError(403, t("Score.quiz_not_in_library"))

    if _already_submitted(quiz_id, ctx.user_id):
        raise HttpError(409, t("Score.already_submitted"))

    quiz: Quiz = entry.quiz
    questions = list(quiz.questions)
    if not questions:
        raise HttpError(400, t("Score.quiz_has_no_questions"))

    correct, graded = grade_answers(questions, answers)

    user = db.session.get(User, ctx.user_id)
    score = Score(
        quiz=quiz,
        user=user,
        score=correct / len(questions) * 100,
        total_questions=len(questions),
        correct_answers=correct,
        answers=[
            ScoreAnswer(question=question, selected_option=selected, is_correct=is_correct, order_index=index)
            for index, (question, selected, is_correct) in enumerate(graded)
        ],
    )
    db.session.add(score)
    try:
        db.session.commit()
    except IntegrityError:
        # Unique (quiz, user): a concurrent submission got there first
        db.session.rollback()
        raise HttpError(409, t("Score.already_submitted"))

    current_app.logger.info(
        f"User {ctx.user_id} submitted quiz {quiz_id}: {correct}/{len(questions)}"
    )
    return score


def list_scores(ctx: AuthContext) -> list[Score]:
    scores = Score.query.filter_by(user_id=ctx.user_id).order_by(Score.id).all()
    if not scores:
        raise HttpError(404, t("Score.no_scores_found"))
    return scores


def get_score(ctx: AuthContext, score_id: int) -> Score:
    score = Score.query.filter_by(id=score_id, user_id=ctx.user_id).first()
    if score is None:
        raise HttpError(404, t("Score.score_not_found"))
    return score


def examiner_scores(ctx: AuthContext) -> list[Score]:
    """Scores submitted on any of the caller's quizzes."""
    quiz_ids = [quiz_id for (quiz_id,) in db.session.query(Quiz.id).filter_by(user_id=ctx.user_id)]
    if not quiz_ids:
        raise HttpError(404, t("Score.no_owned_quizzes_found"))

    scores = Score.query.filter(Score.quiz_id.in_(quiz_ids)).order_by(Score.id).all()
    if not scores:
        raise HttpError(404, t("Score.no_scores_found_for_owned_quizzes"))
    return scores


def delete_score(ctx: AuthContext, raw_score_id) -> None:
    if is_blank(raw_score_id):
        raise HttpError(400, t("Score.score_id_required"))

    score_id = parse_id(raw_score_id)
    score = db.session.get(Score, score_id) if score_id is not None else None
    if score is None:
        raise HttpError(404, t("Score.score_not_found"))

    if not score.quiz.is_owned_by(ctx.user_id):
        SecurityLogger.log_unauthorized_access(f"score:{score.id}", ctx.user_id)
        raise HttpError(403, t("Score.only_quiz_owner_can_delete"))

    db.session.delete(score)
    db.session.commit()
    current_app.logger.info(f"User {ctx.user_id} deleted score {score_id}")

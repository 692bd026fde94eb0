"""
Question operations. A question belongs to exactly one quiz and only the
quiz owner may change it.
"""
from flask import current_app

from digitaltests import db
from digitaltests.common.context import AuthContext
from digitaltests.common.errors import HttpError
from digitaltests.common.i18n import t
from digitaltests.common.parsing import is_blank, parse_id
from digitaltests.quiz.models import Question, Quiz
from digitaltests.quiz.service import get_quiz_or_404, require_owner, shows_answers
from digitaltests.security import SecurityLogger


def _valid_options(options) -> bool:
    return (
        isinstance(options, list)
        and len(options) >= 2
        and all(isinstance(option, str) and option.strip() for option in options)
    )


def _valid_correct_option(correct_option, options: list) -> bool:
    return (
        isinstance(correct_option, int)
        and not isinstance(correct_option, bool)
        and 0 <= correct_option < len(options)
    )


def _get_question_or_404(question_id) -> Question:
    question_id = parse_id(question_id)
    question = db.session.get(Question, question_id) if question_id is not None else None
    if question is None:
        raise HttpError(404, t("Question.question_not_found"))
    return question


def _require_read_access(ctx: AuthContext, quiz: Quiz) -> None:
    """Owners read anything; others only questions of public quizzes."""
    if not quiz.is_owned_by(ctx.user_id) and not quiz.is_public():
        SecurityLogger.log_unauthorized_access(f"quiz:{quiz.id}/questions", ctx.user_id)
        raise HttpError(403, t("Question.not_authorized_to_access"))


def add_question(ctx: AuthContext, data: dict) -> Question:
    """Append a new question at the end of the quiz."""
    quiz_id = data.get("quizId")
    text = data.get("question")
    options = data.get("options")
    correct_option = data.get("correctOption")

    if is_blank(quiz_id) or is_blank(text) or options is None or correct_option is None:
        raise HttpError(400, t("Question.required_fields_missing"))
    if not isinstance(text, str):
        raise HttpError(400, t("Question.required_fields_missing"))
    if not _valid_options(options):
        raise HttpError(400, t("Question.invalid_options"))
    if not _valid_correct_option(correct_option, options):
        raise HttpError(400, t("Question.invalid_correct_option"))

    quiz = get_quiz_or_404(quiz_id, "Question.quiz_not_found")
    require_owner(ctx, quiz, "Question.not_authorized_to_add")

    question = Question(
        question_text=text.strip(),
        correct_option=correct_option,
        order_index=quiz.next_order_index(),
    )
    question.set_options([option.strip() for option in options])
    quiz.questions.append(question)
    db.session.commit()

    current_app.logger.info(f"User {ctx.user_id} added question {question.id} to quiz {quiz.id}")
    return question


def update_question(ctx: AuthContext, question_id: int, data: dict) -> Question:
    question = _get_question_or_404(question_id)
    require_owner(ctx, question.quiz, "Question.not_authorized_to_update")

    text = data.get("question")
    options = data.get("options")
    correct_option = data.get("correctOption")

    new_options = question.option_texts
    if isinstance(options, list):
        if not _valid_options(options):
            raise HttpError(400, t("Question.invalid_options"))
        new_options = [option.strip() for option in options]

    new_correct = question.correct_option if correct_option is None else correct_option
    # The stored correct option has to stay in range when only the options change
    if not _valid_correct_option(new_correct, new_options):
        raise HttpError(400, t("Question.invalid_correct_option"))

    if isinstance(text, str) and text.strip():
        question.question_text = text.strip()
    if isinstance(options, list):
        question.set_options(new_options)
    question.correct_option = new_correct

    db.session.commit()
    return question


def delete_question(ctx: AuthContext, quiz_id: int, question_id: int) -> None:
    quiz = get_quiz_or_404(quiz_id, "Question.quiz_not_found")
    require_owner(ctx, quiz, "Question.not_authorized_to_delete")

    question = next((q for q in quiz.questions if q.id == question_id), None)
    if question is None:
        raise HttpError(404, t("Question.question_not_found_in_quiz"))

    quiz.questions.remove(question)
    for index, remaining in enumerate(quiz.questions):
        remaining.order_index = index
    db.session.commit()

    current_app.logger.info(f"User {ctx.user_id} deleted question {question_id} from quiz {quiz.id}")


def get_question(ctx: AuthContext, question_id: int) -> dict:
    question = _get_question_or_404(question_id)
    _require_read_access(ctx, question.quiz)
    return question.to_dict(include_answer=shows_answers(ctx, question.quiz), include_quiz=True)


def get_quiz_questions(ctx: AuthContext, quiz_id: int) -> list[dict]:
    quiz = get_quiz_or_404(quiz_id, "Question.quiz_not_found")
    _require_read_access(ctx, quiz)
    include_answer = shows_answers(ctx, quiz)
    return [question.to_dict(include_answer=include_answer) for question in quiz.questions]

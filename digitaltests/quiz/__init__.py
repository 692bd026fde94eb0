"""
Quiz module: quiz ownership, per-user libraries and question management.
"""
from flask import Blueprint

quiz_bp = Blueprint("quiz", __name__, url_prefix="/api/quizzes")
question_bp = Blueprint("question", __name__, url_prefix="/api/questions")

from digitaltests.quiz import routes, library_routes, question_routes  # noqa: E402,F401

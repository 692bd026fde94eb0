"""
Database models for quiz submissions.

A Score is written once per (quiz, user) and never updated; the unique
constraint makes a second submission fail at the database.
"""
from datetime import datetime

from digitaltests import db


class Score(db.Model):
    __tablename__ = "scores"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    score = db.Column(db.Float, nullable=False)  # Percentage score
    total_questions = db.Column(db.Integer, nullable=False)
    correct_answers = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    answers = db.relationship(
        "ScoreAnswer",
        backref="score",
        order_by="ScoreAnswer.order_index",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.UniqueConstraint("quiz_id", "user_id", name="uq_score_quiz_user"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Score {self.id}: User {self.user_id}, Quiz {self.quiz_id}, {self.score}>"

    def to_dict(self, include_user: bool = False) -> dict:
        data = {
            "id": self.id,
            "quiz": self.quiz.to_dict(include_questions=True, include_answers=True) if self.quiz else self.quiz_id,
            "user": self.user.summary() if include_user and self.user else self.user_id,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "correctAnswers": self.correct_answers,
            "answers": [answer.to_dict() for answer in self.answers],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        return data


class ScoreAnswer(db.Model):
    """The option a user picked for one question of a submitted quiz."""
    __tablename__ = "score_answers"

    id = db.Column(db.Integer, primary_key=True)
    score_id = db.Column(db.Integer, db.ForeignKey("scores.id", ondelete="CASCADE"), nullable=False, index=True)
    # Kept after the question is deleted so the score history survives
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete="SET NULL"), nullable=True, index=True)
    selected_option = db.Column(db.Integer, nullable=True)  # None when the answer was left out
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    question = db.relationship("Question")

    __table_args__ = (
        db.Index("ix_score_answers_score_order", "score_id", "order_index"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ScoreAnswer {self.id}: Question {self.question_id}>"

    def to_dict(self) -> dict:
        return {
            "question": self.question.to_dict(include_answer=True) if self.question else self.question_id,
            "selectedOption": self.selected_option,
            "isCorrect": self.is_correct,
        }

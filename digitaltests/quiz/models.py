"""
Database models for quizzes, their questions and per-user libraries.

Questions are multiple choice: an ordered list of option texts and the
index of the correct one.
"""
from datetime import datetime

from digitaltests import db


VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"
VISIBILITIES = (VISIBILITY_PUBLIC, VISIBILITY_PRIVATE)


class Quiz(db.Model):
    """A quiz owned by one user, visible to others only when public."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    time = db.Column(db.Float, nullable=False)  # Time limit, must be positive
    visibility = db.Column(db.String(10), nullable=False, default=VISIBILITY_PRIVATE, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    questions = db.relationship(
        "Question",
        backref="quiz",
        order_by="Question.order_index",
        cascade="all, delete-orphan",
    )
    scores = db.relationship("Score", backref="quiz", cascade="all, delete-orphan")
    library_entries = db.relationship("LibraryEntry", backref="quiz", cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint("time > 0", name="ck_quizzes_time_positive"),
        db.Index("ix_quizzes_user_visibility", "user_id", "visibility"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Quiz {self.id}: {self.title}>"

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def is_public(self) -> bool:
        return self.visibility == VISIBILITY_PUBLIC

    def get_question_count(self) -> int:
        return len(self.questions)

    def next_order_index(self) -> int:
        return max((q.order_index for q in self.questions), default=-1) + 1

    def to_dict(self, include_questions: bool = True, include_answers: bool = False) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "time": self.time,
            "visibility": self.visibility,
            "user": self.owner.summary() if self.owner else self.user_id,
            "questionCount": self.get_question_count(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_questions:
            data["questions"] = [q.to_dict(include_answer=include_answers) for q in self.questions]
        else:
            data["questions"] = [q.id for q in self.questions]
        return data


class Question(db.Model):
    """A multiple choice question belonging to one quiz."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    correct_option = db.Column(db.Integer, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)  # Position within the quiz
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    options = db.relationship(
        "QuestionOption",
        backref="question",
        order_by="QuestionOption.order_index",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index("ix_questions_quiz_order", "quiz_id", "order_index"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Question {self.id} of quiz {self.quiz_id}>"

    @property
    def option_texts(self) -> list[str]:
        return [opt.option_text for opt in self.options]

    def set_options(self, texts: list[str]) -> None:
        """Replace the options, keeping the given order."""
        self.options = [QuestionOption(option_text=text, order_index=i) for i, text in enumerate(texts)]

    def check_answer(self, selected_option) -> bool:
        return selected_option is not None and selected_option == self.correct_option

    def to_dict(self, include_answer: bool = True, include_quiz: bool = False) -> dict:
        data = {
            "id": self.id,
            "question": self.question_text,
            "options": self.option_texts,
        }
        if include_answer:
            data["correctOption"] = self.correct_option
        if include_quiz and self.quiz is not None:
            data["quiz"] = {
                "id": self.quiz.id,
                "title": self.quiz.title,
                "description": self.quiz.description,
                "time": self.quiz.time,
                "visibility": self.quiz.visibility,
                "user": self.quiz.user_id,
            }
        else:
            data["quiz"] = self.quiz_id
        return data


class QuestionOption(db.Model):
    """One answer option of a question, kept in display order."""
    __tablename__ = "question_options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    option_text = db.Column(db.Text, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index("ix_question_options_question_order", "question_id", "order_index"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<QuestionOption {self.id}: {self.option_text[:50]}>"


class LibraryEntry(db.Model):
    """
    Membership of a quiz in a user's library.
    The composite primary key gives set semantics: a quiz is in a library at most once.
    """
    __tablename__ = "library_entries"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), primary_key=True, index=True)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<LibraryEntry user={self.user_id} quiz={self.quiz_id}>"

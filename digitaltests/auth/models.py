from datetime import datetime

from flask_login import UserMixin

from digitaltests import db
from digitaltests.common.context import ROLE_USER


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    # username and email are each optional, but at least one is required
    username = db.Column(db.String(30), unique=True, nullable=True, index=True)
    email = db.Column(db.String(255), unique=True, nullable=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # 'Admin' or 'User'
    active = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Owned quizzes, in creation order
    quizzes = db.relationship(
        "Quiz",
        backref="owner",
        order_by="Quiz.id",
        cascade="all, delete-orphan",
    )
    # Library membership, in the order quizzes were added
    library_entries = db.relationship(
        "LibraryEntry",
        backref="user",
        order_by="LibraryEntry.added_at",
        cascade="all, delete-orphan",
    )
    scores = db.relationship("Score", backref="user", cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint("username IS NOT NULL OR email IS NOT NULL", name="ck_users_username_or_email"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User {self.username or self.email} ({self.role})>"

    @property
    def library(self) -> list:
        return [entry.quiz for entry in self.library_entries]

    def has_in_library(self, quiz_id: int) -> bool:
        return any(entry.quiz_id == quiz_id for entry in self.library_entries)

    def summary(self) -> dict:
        """Public identity fields, used when a user is embedded in another resource."""
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "active": self.active,
            "quizzes": [quiz.id for quiz in self.quizzes],
            "library": [entry.quiz_id for entry in self.library_entries],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

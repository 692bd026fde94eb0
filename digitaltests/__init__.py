import logging

from flask import Flask, jsonify, request
from flask_compress import Compress
from flask_cors import CORS
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from digitaltests.config import config  # noqa: E402

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()
cors = CORS()

# Plain-text bodies for unmatched routes, per router prefix
ROUTER_NOT_FOUND_MESSAGES = {
    "/api/users": "No users routes found!",
    "/api/auths": "No auths routes found",
    "/api/quizzes": "No quizzes routes found!",
    "/api/questions": "No questions routes found!",
    "/api/scores": "No score routes found!",
}


def create_app() -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.
    """
    # Re-read config so values set after import (tests, .env) are picked up
    config.reload()
    config.validate()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = config.SECRET_KEY
    db_uri = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    if db_uri.startswith("mysql"):
        # Connection pooling only applies to the server database
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            },
        }

    app.config["COMPRESS_MIMETYPES"] = ["application/json"]
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE
    app.json.sort_keys = False

    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)
    cors.init_app(
        app,
        origins=config.CORS_ORIGINS,
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept-Language"],
    )

    from digitaltests.security import init_security
    init_security(app)

    from digitaltests.auth.session import init_session
    init_session(login_manager)

    from digitaltests.common.errors import register_error_handlers
    register_error_handlers(app)

    @app.errorhandler(404)
    def handle_404(e):
        """Unmatched routes get a fixed plain-text body per router."""
        path = request.path
        for prefix, message in ROUTER_NOT_FOUND_MESSAGES.items():
            if path == prefix or path.startswith(prefix + "/"):
                app.logger.warning(f"404 error: {request.method} {path}")
                return message, 404, {"Content-Type": "text/plain; charset=utf-8"}
        return jsonify({"message": "Route not found!"}), 404

    @app.errorhandler(405)
    def handle_405(e):
        app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({"message": f"Method not allowed: {request.method} {request.path}"}), 405

    # Register blueprints
    from digitaltests.users import users_bp
    app.register_blueprint(users_bp)

    from digitaltests.auth import auth_bp
    app.register_blueprint(auth_bp)

    from digitaltests.quiz import quiz_bp, question_bp
    app.register_blueprint(quiz_bp)
    app.register_blueprint(question_bp)

    from digitaltests.scores import scores_bp
    app.register_blueprint(scores_bp)

    from digitaltests.cli import register_commands
    register_commands(app)

    # Create tables if they do not exist
    with app.app_context():
        from digitaltests.auth.models import User  # noqa: F401
        from digitaltests.quiz.models import LibraryEntry, Question, QuestionOption, Quiz  # noqa: F401
        from digitaltests.scores.models import Score, ScoreAnswer  # noqa: F401
        db.create_all()

    return app

from flask import Blueprint

# Blueprint for quiz submissions and results
scores_bp = Blueprint("scores", __name__, url_prefix="/api/scores")

# Import routes so that they are registered with the blueprint
from digitaltests.scores import routes  # noqa: E402,F401

from flask import Blueprint

# Blueprint for session related endpoints
auth_bp = Blueprint("auth", __name__, url_prefix="/api/auths")

# Import routes so that they are registered with the blueprint
from digitaltests.auth import routes  # noqa: E402,F401

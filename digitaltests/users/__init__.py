from flask import Blueprint

# Blueprint for account endpoints
users_bp = Blueprint("users", __name__, url_prefix="/api/users")

# Import routes so that they are registered with the blueprint
from digitaltests.users import routes  # noqa: E402,F401

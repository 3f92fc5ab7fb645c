from flask import Blueprint

overtime_bp = Blueprint('overtime', __name__)

from . import routes  # noqa: E402,F401

from flask import Blueprint

bonus_bp = Blueprint('bonus', __name__)

from . import routes  # noqa: E402,F401

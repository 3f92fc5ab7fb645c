from flask import jsonify
from sqlalchemy.orm import joinedload
from . import feedback_bp
from models import db
from models.feedback import Feedback
from models.rbac import Capability
from utils.decorators import token_required, current_principal
from utils.validators import json_body, require_fields, parse_bool, parse_text
from workflow.policy import require_author, require_manager


# Submit feedback (Employees and Managers)
@feedback_bp.route('', methods=['POST'])
@feedback_bp.route('/', methods=['POST'])
@token_required
def submit_feedback():
    principal = require_author(current_principal(), Capability.FEEDBACK)
    data = json_body()
    require_fields(data, ['message'])

    is_anonymous = parse_bool(data.get('is_anonymous'), 'is_anonymous')
    feedback = Feedback(
        message=parse_text(data['message'], 'message'),
        is_anonymous=is_anonymous,
        user_id=None if is_anonymous else principal.id
    )
    db.session.add(feedback)
    db.session.commit()
    return jsonify(feedback.to_dict()), 201


# All feedback, newest first (Manager only)
@feedback_bp.route('', methods=['GET'])
@feedback_bp.route('/', methods=['GET'])
@token_required
def list_feedback():
    require_manager(current_principal(), "Only managers can view feedback")
    items = (
        Feedback.query
        .options(joinedload(Feedback.user))
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
    return jsonify([f.to_dict() for f in items]), 200

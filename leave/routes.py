from flask import jsonify
from . import leave_bp
from models import db
from models.leave import LeaveRequest, LeaveType
from models.rbac import Capability
from utils.decorators import token_required, current_principal
from utils.validators import json_body, require_fields, parse_date, parse_choice, parse_text
from workflow import ApprovalWorkflow, InvalidPayload


def _workflow():
    return ApprovalWorkflow(db.session, LeaveRequest, Capability.LEAVE)


def _leave_payload(data):
    require_fields(data, ['leave_type', 'start_date', 'end_date', 'reason'])
    start_date = parse_date(data['start_date'], 'start_date')
    end_date = parse_date(data['end_date'], 'end_date')
    if start_date > end_date:
        raise InvalidPayload("End date must be on or after start date")
    return {
        'leave_type': parse_choice(data['leave_type'], LeaveType, 'leave_type').value,
        'start_date': start_date,
        'end_date': end_date,
        'reason': parse_text(data['reason'], 'reason'),
    }


# ============================
# Apply for leave
# ============================
@leave_bp.route('', methods=['POST'])
@leave_bp.route('/', methods=['POST'])
@token_required
def apply_leave():
    leave = _workflow().submit(current_principal(), **_leave_payload(json_body()))
    return jsonify(leave.to_dict()), 201


# ============================
# My leaves, newest first
# ============================
@leave_bp.route('/my', methods=['GET'])
@token_required
def my_leaves():
    leaves = _workflow().list_mine(current_principal())
    return jsonify([l.to_dict() for l in leaves]), 200


# ============================
# Review queue (Manager / Project Manager), oldest first
# ============================
@leave_bp.route('/pending', methods=['GET'])
@token_required
def pending_leaves():
    leaves = _workflow().list_pending(current_principal())
    return jsonify([l.to_dict(include_requester=True) for l in leaves]), 200


# ============================
# Approve / Reject
# ============================
@leave_bp.route('/<int:leave_id>/status', methods=['PATCH'])
@token_required
def update_leave_status(leave_id):
    data = json_body()
    leave = _workflow().decide(current_principal(), leave_id, data.get('status'))
    return jsonify(leave.to_dict()), 200

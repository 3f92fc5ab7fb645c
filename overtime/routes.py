from flask import jsonify
from . import overtime_bp
from models import db
from models.overtime import OvertimeRequest
from models.rbac import Capability
from utils.decorators import token_required, current_principal
from utils.validators import json_body, require_fields, parse_date, parse_positive_number, parse_text
from workflow import ApprovalWorkflow

MAX_HOURS_PER_DAY = 24


def _workflow():
    return ApprovalWorkflow(
        db.session, OvertimeRequest, Capability.OVERTIME,
        cancellable=True,
        duplicate_message="Overtime request already exists for this date",
    )


# Submit overtime request (Employee)
@overtime_bp.route('', methods=['POST'])
@overtime_bp.route('/', methods=['POST'])
@token_required
def submit_overtime():
    data = json_body()
    require_fields(data, ['date', 'hours', 'reason'])
    request_ = _workflow().submit(
        current_principal(),
        date=parse_date(data['date'], 'date'),
        hours=parse_positive_number(data['hours'], 'hours', maximum=MAX_HOURS_PER_DAY),
        reason=parse_text(data['reason'], 'reason'),
    )
    return jsonify(request_.to_dict()), 201


# My overtime history
@overtime_bp.route('/my', methods=['GET'])
@token_required
def my_overtime():
    requests_ = _workflow().list_mine(current_principal())
    return jsonify([r.to_dict() for r in requests_]), 200


# Pending requests (Manager / Project Manager)
@overtime_bp.route('/pending', methods=['GET'])
@token_required
def pending_overtime():
    requests_ = _workflow().list_pending(current_principal())
    return jsonify([r.to_dict(include_requester=True) for r in requests_]), 200


# Approve / Reject with optional remarks
@overtime_bp.route('/<int:request_id>/status', methods=['PATCH'])
@token_required
def update_overtime_status(request_id):
    data = json_body()
    remarks = data.get('remarks')
    request_ = _workflow().decide(
        current_principal(), request_id, data.get('status'),
        remarks=str(remarks).strip() if remarks not in (None, "") else None,
    )
    return jsonify(request_.to_dict()), 200


# Cancel own pending request (Employee)
@overtime_bp.route('/<int:request_id>', methods=['DELETE'])
@token_required
def cancel_overtime(request_id):
    _workflow().cancel(current_principal(), request_id)
    return jsonify({'message': 'Request cancelled'}), 200

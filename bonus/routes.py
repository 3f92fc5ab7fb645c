from flask import jsonify
from . import bonus_bp
from .services import bonus_stats, bonus_candidates
from models import db
from models.bonus import BonusRequest
from models.rbac import Capability
from models.user import User
from utils.decorators import token_required, current_principal
from utils.validators import json_body, require_fields, parse_date, parse_positive_number, parse_text
from workflow import ApprovalWorkflow, InvalidPayload
from workflow.policy import require_author, require_manager


def _workflow():
    # employees see bonuses assigned to them, not ones they created
    return ApprovalWorkflow(db.session, BonusRequest, Capability.BONUS, owner_column='user_id')


# Candidates for bonus assignment (Manager only)
@bonus_bp.route('/candidates', methods=['GET'])
@token_required
def candidates():
    require_manager(current_principal(), "Only managers can view candidates")
    return jsonify(bonus_candidates()), 200


# Assign bonus (Manager only)
@bonus_bp.route('', methods=['POST'])
@bonus_bp.route('/', methods=['POST'])
@token_required
def assign_bonus():
    principal = require_author(current_principal(), Capability.BONUS, "Only managers can assign bonuses")
    data = json_body()
    require_fields(data, ['user_id', 'amount', 'bonus_type', 'reason', 'period'])

    beneficiary_id = data['user_id']
    if isinstance(beneficiary_id, bool) or not isinstance(beneficiary_id, int):
        raise InvalidPayload("user_id must be an integer")
    if db.session.get(User, beneficiary_id) is None:
        raise InvalidPayload("user_id does not match an existing user")

    bonus = _workflow().submit(
        principal,
        user_id=beneficiary_id,
        amount=parse_positive_number(data['amount'], 'amount'),
        bonus_type=parse_text(data['bonus_type'], 'bonus_type'),
        reason=parse_text(data['reason'], 'reason'),
        period=parse_date(data['period'], 'period'),
    )
    return jsonify(bonus.to_dict()), 201


# My bonuses (as beneficiary)
@bonus_bp.route('/my', methods=['GET'])
@token_required
def my_bonuses():
    bonuses = _workflow().list_mine(current_principal())
    return jsonify([b.to_dict() for b in bonuses]), 200


# Review queue (Manager / Project Manager)
@bonus_bp.route('/pending', methods=['GET'])
@token_required
def pending_bonuses():
    bonuses = _workflow().list_pending(current_principal())
    return jsonify([b.to_dict(include_requester=True, include_beneficiary=True) for b in bonuses]), 200


# All bonuses (Manager only)
@bonus_bp.route('/all', methods=['GET'])
@token_required
def all_bonuses():
    bonuses = _workflow().list_all(current_principal())
    return jsonify([
        b.to_dict(include_requester=True, include_reviewer=True, include_beneficiary=True)
        for b in bonuses
    ]), 200


@bonus_bp.route('/<int:bonus_id>/status', methods=['PATCH'])
@token_required
def update_bonus_status(bonus_id):
    data = json_body()
    bonus = _workflow().decide(current_principal(), bonus_id, data.get('status'))
    return jsonify(bonus.to_dict()), 200


@bonus_bp.route('/<int:bonus_id>/approve', methods=['PATCH'])
@token_required
def approve_bonus(bonus_id):
    bonus = _workflow().decide(current_principal(), bonus_id, 'APPROVED')
    return jsonify(bonus.to_dict()), 200


# Totals (Manager only)
@bonus_bp.route('/stats', methods=['GET'])
@token_required
def stats():
    require_manager(current_principal(), "Only managers can view stats")
    return jsonify(bonus_stats()), 200

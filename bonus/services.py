from typing import Dict, Any, List

from sqlalchemy import func, case

from models import db
from models.approvals import RequestStatus
from models.bonus import BonusRequest
from models.rbac import Role
from models.user import User


def bonus_stats() -> Dict[str, Any]:
    approved, pending, pending_count = db.session.query(
        func.sum(case((BonusRequest.status == RequestStatus.APPROVED.value, BonusRequest.amount), else_=0.0)),
        func.sum(case((BonusRequest.status == RequestStatus.PENDING.value, BonusRequest.amount), else_=0.0)),
        func.sum(case((BonusRequest.status == RequestStatus.PENDING.value, 1), else_=0)),
    ).one()

    approved = round(float(approved or 0.0), 2)
    pending = round(float(pending or 0.0), 2)
    return {
        'total_approved': approved,
        'total_pending': pending,
        'total_allocated': round(approved + pending, 2),
        'pending_count': int(pending_count or 0),
    }


def bonus_candidates() -> List[Dict[str, Any]]:
    users = User.query.order_by(User.id.asc()).all()
    return [
        {
            'id': u.id,
            'name': u.display_name,
            'email': u.email,
            'role': Role.normalize(u.role).value,
        }
        for u in users
    ]

from datetime import datetime
from enum import Enum

from sqlalchemy.orm import declared_attr

from models import db


class RequestStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


DECISIONS = (RequestStatus.APPROVED, RequestStatus.REJECTED)


def review_constraints(table):
    """Table-level checks every reviewable request table carries."""
    statuses = ", ".join(f"'{s.value}'" for s in RequestStatus)
    return (
        db.CheckConstraint(f"status IN ({statuses})", name=f"ck_{table}_status"),
        db.CheckConstraint(
            "(reviewer_id IS NULL AND reviewed_at IS NULL) OR "
            "(reviewer_id IS NOT NULL AND reviewed_at IS NOT NULL)",
            name=f"ck_{table}_review_pair",
        ),
    )


class ReviewableMixin:
    """Columns and serialization shared by leave, overtime and bonus requests."""

    id = db.Column(db.Integer, primary_key=True)
    status = db.Column(db.String(20), nullable=False, default=RequestStatus.PENDING.value, index=True)
    reviewed_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    @declared_attr
    def requester_id(cls):
        return db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    @declared_attr
    def reviewer_id(cls):
        return db.Column(db.Integer, db.ForeignKey('users.id'))

    @declared_attr
    def requester(cls):
        return db.relationship('User', foreign_keys=f"{cls.__name__}.requester_id")

    @declared_attr
    def reviewer(cls):
        return db.relationship('User', foreign_keys=f"{cls.__name__}.reviewer_id")

    @property
    def is_pending(self):
        return self.status == RequestStatus.PENDING.value

    def payload_dict(self):
        return {}

    def to_dict(self, include_requester=False, include_reviewer=False):
        data = {
            'id': self.id,
            'requester_id': self.requester_id,
            'status': self.status,
            'reviewer_id': self.reviewer_id,
            'reviewed_at': self.reviewed_at.isoformat() if self.reviewed_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        data.update(self.payload_dict())
        if include_requester:
            data['requester'] = self.requester.to_summary() if self.requester else None
        if include_reviewer:
            data['reviewer'] = self.reviewer.to_summary() if self.reviewer else None
        return data

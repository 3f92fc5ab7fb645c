from models import db
from models.approvals import ReviewableMixin, review_constraints


class BonusRequest(ReviewableMixin, db.Model):
    """A bonus assigned by a manager (the requester) to an employee (user_id)."""
    __tablename__ = 'bonus_requests'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    bonus_type = db.Column(db.String(50), nullable=False)
    reason = db.Column(db.Text, nullable=False)
    period = db.Column(db.Date, nullable=False)

    __table_args__ = review_constraints('bonus_requests') + (
        db.CheckConstraint('amount > 0', name='ck_bonus_requests_amount'),
    )

    beneficiary = db.relationship('User', foreign_keys=[user_id])

    def payload_dict(self):
        return {
            'user_id': self.user_id,
            'amount': self.amount,
            'bonus_type': self.bonus_type,
            'reason': self.reason,
            'period': self.period.isoformat() if self.period else None,
        }

    def to_dict(self, include_requester=False, include_reviewer=False, include_beneficiary=False):
        data = super().to_dict(include_requester=include_requester, include_reviewer=include_reviewer)
        if include_beneficiary:
            data['beneficiary'] = self.beneficiary.to_summary() if self.beneficiary else None
        return data

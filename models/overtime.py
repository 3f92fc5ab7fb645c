from models import db
from models.approvals import ReviewableMixin, review_constraints


class OvertimeRequest(ReviewableMixin, db.Model):
    __tablename__ = 'overtime_requests'

    date = db.Column(db.Date, nullable=False)
    hours = db.Column(db.Float, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    remarks = db.Column(db.Text)

    # One request per employee per calendar day, checked on insert
    __table_args__ = review_constraints('overtime_requests') + (
        db.UniqueConstraint('requester_id', 'date', name='uq_overtime_requester_date'),
    )

    def payload_dict(self):
        return {
            'date': self.date.isoformat() if self.date else None,
            'hours': self.hours,
            'reason': self.reason,
            'remarks': self.remarks,
        }

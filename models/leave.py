from enum import Enum
from models import db
from models.approvals import ReviewableMixin, review_constraints


class LeaveType(Enum):
    ANNUAL = "ANNUAL"
    CASUAL = "CASUAL"
    SICK = "SICK"
    UNPAID = "UNPAID"
    OTHER = "OTHER"


class LeaveRequest(ReviewableMixin, db.Model):
    __tablename__ = 'leave_requests'

    leave_type = db.Column(db.String(20), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    reason = db.Column(db.Text, nullable=False)

    __table_args__ = review_constraints('leave_requests') + (
        db.CheckConstraint('start_date <= end_date', name='ck_leave_requests_date_order'),
    )

    @property
    def total_days(self):
        return (self.end_date - self.start_date).days + 1

    def payload_dict(self):
        return {
            'leave_type': self.leave_type,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'total_days': self.total_days if self.start_date and self.end_date else None,
            'reason': self.reason,
        }

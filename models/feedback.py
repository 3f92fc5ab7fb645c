from datetime import datetime
from models import db
from models.rbac import Role


class Feedback(db.Model):
    __tablename__ = 'feedback'

    id = db.Column(db.Integer, primary_key=True)
    message = db.Column(db.Text, nullable=False)
    is_anonymous = db.Column(db.Boolean, nullable=False, default=False)
    # NULL when the feedback was submitted anonymously
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'message': self.message,
            'is_anonymous': self.is_anonymous,
            'user_id': self.user_id,
            'user': {'email': self.user.email, 'role': Role.normalize(self.user.role).value} if self.user else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

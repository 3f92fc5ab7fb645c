from datetime import datetime
from enum import Enum
from models import db
from models.rbac import Role


class TargetAudience(Enum):
    ALL = "ALL"
    EMPLOYEES = "EMPLOYEES"
    MANAGERS = "MANAGERS"


class Announcement(db.Model):
    __tablename__ = 'announcements'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    is_pinned = db.Column(db.Boolean, nullable=False, default=False)
    target_audience = db.Column(db.String(20), nullable=False, default=TargetAudience.ALL.value)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    author = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'message': self.message,
            'is_pinned': self.is_pinned,
            'target_audience': self.target_audience,
            'author_id': self.author_id,
            # email and role only, never the full user row
            'author': {'email': self.author.email, 'role': Role.normalize(self.author.role).value} if self.author else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

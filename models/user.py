from datetime import datetime
from models import db
from models.rbac import Role, Principal


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), nullable=False, unique=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(30), nullable=False, default=Role.EMPLOYEE.value)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employee_profile = db.relationship('Employee', backref='user', uselist=False, lazy=True)

    @property
    def display_name(self):
        if self.employee_profile and self.employee_profile.name:
            return self.employee_profile.name
        return self.email

    def to_principal(self):
        return Principal(id=self.id, role=Role.normalize(self.role), email=self.email)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.display_name,
            'role': Role.normalize(self.role).value,
            'role_title': self.employee_profile.role_title if self.employee_profile else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def to_summary(self):
        """Denormalized requester/reviewer view embedded in request listings."""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.display_name,
            'role': Role.normalize(self.role).value,
            'role_title': self.employee_profile.role_title if self.employee_profile else None,
        }

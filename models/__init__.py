# models/__init__.py
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models
from .user import User
from .employee import Employee
from .approvals import RequestStatus, ReviewableMixin
from .leave import LeaveRequest, LeaveType
from .overtime import OvertimeRequest
from .bonus import BonusRequest
from .announcement import Announcement, TargetAudience
from .feedback import Feedback

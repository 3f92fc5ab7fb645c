from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    EMPLOYEE = "EMPLOYEE"
    OPERATOR = "OPERATOR"
    MANAGER = "MANAGER"
    PROJECT_MANAGER = "PROJECT_MANAGER"

    @classmethod
    def normalize(cls, raw):
        """Map a stored/claimed role string onto a Role.

        Accepts any casing and "project manager" / "project-manager" spellings.
        Unknown or empty values fall back to EMPLOYEE.
        """
        if isinstance(raw, cls):
            return raw
        key = str(raw or "").strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            return cls.EMPLOYEE


class Capability(Enum):
    LEAVE = "LEAVE"
    OVERTIME = "OVERTIME"
    BONUS = "BONUS"
    ANNOUNCEMENT = "ANNOUNCEMENT"
    FEEDBACK = "FEEDBACK"


@dataclass(frozen=True)
class Principal:
    id: int
    role: Role
    email: str = None


REVIEWER_ROLES = frozenset({Role.MANAGER, Role.PROJECT_MANAGER})
MANAGEMENT_ROLES = frozenset({Role.MANAGER})


class RBAC:
    # None means any authenticated principal may author
    AUTHOR_ROLES = {
        Capability.LEAVE: None,
        Capability.OVERTIME: None,
        Capability.FEEDBACK: None,
        Capability.BONUS: MANAGEMENT_ROLES,
        Capability.ANNOUNCEMENT: MANAGEMENT_ROLES,
    }

    @staticmethod
    def can_review(principal):
        return principal is not None and principal.role in REVIEWER_ROLES

    @staticmethod
    def can_manage(principal):
        return principal is not None and principal.role in MANAGEMENT_ROLES

    @staticmethod
    def can_author(principal, capability):
        if principal is None:
            return False
        allowed = RBAC.AUTHOR_ROLES.get(capability, MANAGEMENT_ROLES)
        return allowed is None or principal.role in allowed

from models.rbac import RBAC
from workflow.errors import Unauthenticated, Forbidden


def require_principal(principal):
    if principal is None:
        raise Unauthenticated()
    return principal


def require_reviewer(principal, message="Forbidden"):
    require_principal(principal)
    if not RBAC.can_review(principal):
        raise Forbidden(message)
    return principal


def require_manager(principal, message="Only managers can perform this action"):
    require_principal(principal)
    if not RBAC.can_manage(principal):
        raise Forbidden(message)
    return principal


def require_author(principal, capability, message=None):
    require_principal(principal)
    if not RBAC.can_author(principal, capability):
        raise Forbidden(message or f"Not allowed to create {capability.value.lower()} entries")
    return principal

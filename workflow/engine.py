import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from models.approvals import RequestStatus, DECISIONS
from models.rbac import Capability, Principal
from models.user import User
from workflow.errors import AlreadyDecided, DuplicateRequest, Forbidden, InvalidDecision, InvalidState, NotFound
from workflow.policy import require_author, require_manager, require_principal, require_reviewer

logger = logging.getLogger(__name__)


def parse_decision(value) -> RequestStatus:
    key = str(value or "").strip().upper()
    for decision in DECISIONS:
        if decision.value == key:
            return decision
    raise InvalidDecision(f"Invalid status '{value}', expected APPROVED or REJECTED")


class ApprovalWorkflow:
    """PENDING -> APPROVED/REJECTED lifecycle for one reviewable request model.

    The session is the store handle; every operation is its own unit of work
    and commits or rolls back before returning. Transitions are conditional
    writes on ``status`` so concurrent reviewers cannot both win.
    """

    def __init__(self, session, model, capability: Capability, cancellable: bool = False,
                 owner_column: str = "requester_id", duplicate_message: Optional[str] = None):
        self.session = session
        self.model = model
        self.capability = capability
        self.cancellable = cancellable
        self.owner_column = owner_column
        # set only for models whose unique constraint is a duplicate guard
        self.duplicate_message = duplicate_message

    @property
    def kind(self):
        return self.capability.value.lower()

    def submit(self, principal: Principal, **payload):
        require_author(principal, self.capability)

        entity = self.model(
            requester_id=principal.id,
            status=RequestStatus.PENDING.value,
            **payload
        )
        self.session.add(entity)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if self.duplicate_message is None:
                raise
            logger.info("Duplicate %s request from user %s rejected", self.kind, principal.id)
            raise DuplicateRequest(self.duplicate_message) from exc

        logger.info("%s request %s submitted by user %s", self.kind, entity.id, principal.id)
        return entity

    def get(self, request_id):
        entity = self.session.get(self.model, request_id)
        if entity is None:
            raise NotFound(f"{self.kind.capitalize()} request not found")
        return entity

    def list_mine(self, principal: Principal) -> List:
        require_principal(principal)
        owner = getattr(self.model, self.owner_column)
        return (
            self.session.query(self.model)
            .filter(owner == principal.id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def list_pending(self, principal: Principal) -> List:
        require_reviewer(principal, f"Only managers can view pending {self.kind} requests")
        # TODO: scope the queue to the reviewer's own team once reporting lines are modelled
        return (
            self.session.query(self.model)
            .options(joinedload(self.model.requester).joinedload(User.employee_profile))
            .filter(self.model.status == RequestStatus.PENDING.value)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .all()
        )

    def list_all(self, principal: Principal) -> List:
        require_manager(principal, f"Only managers can view all {self.kind} requests")
        return (
            self.session.query(self.model)
            .options(joinedload(self.model.requester), joinedload(self.model.reviewer))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def decide(self, principal: Principal, request_id, decision, remarks=None):
        require_reviewer(principal, f"Only managers can approve or reject {self.kind} requests")
        decision = parse_decision(decision)

        values = {
            'status': decision.value,
            'reviewer_id': principal.id,
            'reviewed_at': datetime.utcnow(),
        }
        if remarks is not None and hasattr(self.model, 'remarks'):
            values['remarks'] = remarks

        updated = (
            self.session.query(self.model)
            .filter(self.model.id == request_id, self.model.status == RequestStatus.PENDING.value)
            .update(values, synchronize_session=False)
        )
        if updated == 0:
            self.session.rollback()
            entity = self.get(request_id)
            raise AlreadyDecided(f"{self.kind.capitalize()} request is already {entity.status}")

        self.session.commit()
        logger.info("%s request %s %s by user %s", self.kind, request_id, decision.value, principal.id)
        return self.get(request_id)

    def cancel(self, principal: Principal, request_id):
        require_principal(principal)
        if not self.cancellable:
            raise Forbidden(f"{self.kind.capitalize()} requests cannot be cancelled")

        entity = self.get(request_id)
        if entity.requester_id != principal.id:
            raise Forbidden("Only the requester can cancel this request")

        deleted = (
            self.session.query(self.model)
            .filter(self.model.id == request_id, self.model.status == RequestStatus.PENDING.value)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            self.session.rollback()
            raise InvalidState("Cannot cancel a processed request")

        self.session.commit()
        logger.info("%s request %s cancelled by user %s", self.kind, request_id, principal.id)

from .engine import ApprovalWorkflow, parse_decision
from .errors import (
    WorkflowError, Unauthenticated, Forbidden, InvalidPayload, InvalidDecision,
    DuplicateRequest, InvalidState, NotFound, AlreadyDecided
)

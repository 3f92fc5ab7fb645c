"""Typed errors raised by the approval workflow and its adapters.

Every error carries the HTTP status it maps to, so the Flask error handlers
never inspect messages.

    WorkflowError
    +-- Unauthenticated    401
    +-- Forbidden          403
    +-- InvalidPayload     400
    |   +-- InvalidDecision
    +-- DuplicateRequest   400
    +-- InvalidState       400
    +-- NotFound           404
    +-- AlreadyDecided     409
"""


class WorkflowError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(WorkflowError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(WorkflowError):
    status_code = 403
    default_message = "Forbidden"


class InvalidPayload(WorkflowError):
    status_code = 400
    default_message = "Invalid request body"


class InvalidDecision(InvalidPayload):
    default_message = "Invalid status"


class DuplicateRequest(WorkflowError):
    status_code = 400
    default_message = "Request already exists"


class InvalidState(WorkflowError):
    status_code = 400
    default_message = "Request can no longer be changed"


class NotFound(WorkflowError):
    status_code = 404
    default_message = "Request not found"


class AlreadyDecided(WorkflowError):
    status_code = 409
    default_message = "Request has already been decided"

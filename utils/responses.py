from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from models import db
from workflow.errors import WorkflowError


def fail(message="Bad Request", code=400):
    return jsonify({"error": message}), code


def register_error_handlers(app):
    @app.errorhandler(WorkflowError)
    def handle_workflow_error(e):
        level = current_app.logger.warning if e.status_code >= 500 else current_app.logger.info
        level("%s: %s", type(e).__name__, e.message)
        return fail(e.message, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        db.session.rollback()
        # driver text stays in the log, never in the response
        current_app.logger.exception("Database error")
        return fail("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return fail(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        current_app.logger.exception("Unhandled error")
        return fail("Internal server error", 500)

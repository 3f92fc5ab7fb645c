from flask import jsonify, current_app
from . import announcements_bp
from models import db
from models.announcement import Announcement, TargetAudience
from models.rbac import Capability, RBAC
from utils.decorators import token_required, current_principal
from utils.validators import json_body, require_fields, parse_bool, parse_choice, parse_text
from workflow import NotFound
from workflow.policy import require_author, require_manager

# Audiences visible to anyone who is not a manager
PUBLIC_AUDIENCES = (TargetAudience.ALL.value, TargetAudience.EMPLOYEES.value)


def _get_announcement(announcement_id):
    announcement = db.session.get(Announcement, announcement_id)
    if announcement is None:
        raise NotFound("Announcement not found")
    return announcement


# List announcements, pinned first then newest
@announcements_bp.route('', methods=['GET'])
@announcements_bp.route('/', methods=['GET'])
@token_required
def list_announcements():
    query = Announcement.query
    if not RBAC.can_manage(current_principal()):
        query = query.filter(Announcement.target_audience.in_(PUBLIC_AUDIENCES))
    announcements = query.order_by(
        Announcement.is_pinned.desc(),
        Announcement.created_at.desc(),
        Announcement.id.desc()
    ).all()
    return jsonify([a.to_dict() for a in announcements]), 200


# Create announcement (Manager only)
@announcements_bp.route('', methods=['POST'])
@announcements_bp.route('/', methods=['POST'])
@token_required
def create_announcement():
    principal = require_author(current_principal(), Capability.ANNOUNCEMENT, "Only managers can create announcements")
    data = json_body()
    require_fields(data, ['title', 'message'])

    audience = data.get('target_audience')
    announcement = Announcement(
        title=parse_text(data['title'], 'title'),
        message=parse_text(data['message'], 'message'),
        is_pinned=parse_bool(data.get('is_pinned'), 'is_pinned'),
        target_audience=parse_choice(audience, TargetAudience, 'target_audience').value if audience else TargetAudience.ALL.value,
        author_id=principal.id
    )
    db.session.add(announcement)
    db.session.commit()
    current_app.logger.info("Announcement %s created by user %s", announcement.id, principal.id)
    return jsonify(announcement.to_dict()), 201


# Pin / unpin (Manager only)
@announcements_bp.route('/<int:announcement_id>/pin', methods=['PATCH'])
@token_required
def pin_announcement(announcement_id):
    require_manager(current_principal(), "Only managers can pin announcements")
    data = json_body()
    require_fields(data, ['is_pinned'])
    announcement = _get_announcement(announcement_id)
    announcement.is_pinned = parse_bool(data['is_pinned'], 'is_pinned')
    db.session.commit()
    return jsonify(announcement.to_dict()), 200


# Delete (Manager only)
@announcements_bp.route('/<int:announcement_id>', methods=['DELETE'])
@token_required
def delete_announcement(announcement_id):
    principal = require_manager(current_principal(), "Only managers can delete announcements")
    announcement = _get_announcement(announcement_id)
    db.session.delete(announcement)
    db.session.commit()
    current_app.logger.info("Announcement %s deleted by user %s", announcement_id, principal.id)
    return jsonify({'message': 'Announcement deleted'}), 200

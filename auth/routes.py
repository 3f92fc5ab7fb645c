from flask import Blueprint, jsonify, g, current_app
from sqlalchemy.exc import IntegrityError
from models import db
from models.employee import Employee
from models.rbac import Role
from models.user import User
from utils.auth_utils import hash_password, verify_password, generate_token
from utils.decorators import token_required
from utils.validators import json_body, require_fields, parse_text
from workflow.errors import InvalidPayload, Unauthenticated

auth_bp = Blueprint("auth", __name__)

MIN_PASSWORD_LENGTH = 8


def create_user(email, password, role=Role.EMPLOYEE, name=None, role_title=None):
    """Create a user (and employee profile when a name is given). Caller commits."""
    user = User(email=email.strip().lower(), password=hash_password(password), role=Role.normalize(role).value)
    db.session.add(user)
    db.session.flush()
    if name:
        db.session.add(Employee(user_id=user.id, name=name, role_title=role_title))
    return user


# -------------------------
# REGISTER EMPLOYEE
# -------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = json_body()
    require_fields(data, ['email', 'password', 'name'])

    email = parse_text(data['email'], 'email').lower()
    password = data['password']
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPayload(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if User.query.filter_by(email=email).first():
        raise InvalidPayload("Email already registered")

    # Self-registration always yields an EMPLOYEE; elevated roles come from `flask create-user`
    user = create_user(
        email, password,
        name=parse_text(data['name'], 'name'),
        role_title=data.get('role_title')
    )
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise InvalidPayload("Email already registered")

    current_app.logger.info("Registered user %s", user.id)
    return jsonify({"message": "Registration successful", "user": user.to_dict()}), 201


# -------------------------
# LOGIN
# -------------------------
@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    require_fields(data, ['email', 'password'])

    user = User.query.filter_by(email=str(data['email']).strip().lower()).first()
    if not user or not verify_password(user.password, str(data['password'])):
        raise Unauthenticated("Invalid email or password")

    token = generate_token(user)
    response = jsonify({"token": token, "user": user.to_dict()})
    response.set_cookie(
        "token", token,
        httponly=True,
        samesite="Lax",
        secure=not current_app.debug and not current_app.testing,
        max_age=current_app.config.get("JWT_EXPIRES_HOURS", 24) * 3600
    )
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"message": "Logged out"})
    response.delete_cookie("token")
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@token_required
def me():
    return jsonify(g.user.to_dict()), 200

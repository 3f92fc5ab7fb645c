import datetime
import jwt
from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password):
    return generate_password_hash(password)


def verify_password(hash, password):
    return check_password_hash(hash, password)


def generate_token(user):
    hours = current_app.config.get("JWT_EXPIRES_HOURS", 24)
    payload = {
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
        "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    }
    return jwt.encode(payload, current_app.config['SECRET_KEY'], algorithm="HS256")


def decode_token(token):
    return jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=["HS256"])

from flask import request, g, current_app
import jwt
from functools import wraps
from models import db
from models.user import User
from utils.auth_utils import decode_token
from workflow.errors import Unauthenticated


def _read_token():
    auth_header = request.headers.get('Authorization')
    if auth_header:
        parts = auth_header.split(' ')
        if len(parts) == 2 and parts[0] == 'Bearer':
            return parts[1].strip()
        return None
    return request.cookies.get('token')


def token_required(f):
    """Resolve the caller into g.user and g.principal, or answer 401."""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _read_token()
        if not token or token.lower() in ['null', 'undefined']:
            raise Unauthenticated("Token is missing")
        try:
            data = decode_token(token)
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except jwt.InvalidTokenError as e:
            current_app.logger.info("Rejected token: %s", e)
            raise Unauthenticated("Token is invalid")

        user_id = data.get('user_id')
        user = db.session.get(User, user_id) if user_id is not None else None
        if not user:
            raise Unauthenticated("User not found")

        g.user = user
        g.principal = user.to_principal()
        return f(*args, **kwargs)
    return decorated


def current_principal():
    return g.get('principal')

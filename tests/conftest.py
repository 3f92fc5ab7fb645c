import pytest

from app import create_app
from auth.routes import create_user
from config import TestConfig
from models import db
from models.rbac import Role
from utils.auth_utils import generate_token


@pytest.fixture
def app(tmp_path):
    # File-backed SQLite so threads get their own connections
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'hr_ops_test.db'}"

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(role=Role.EMPLOYEE, email=None, name=None, role_title=None, password="password123"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user = create_user(email, password, role=role, name=name, role_title=role_title)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def employee(make_user):
    return make_user(Role.EMPLOYEE, email="erin@example.com", name="Erin Employee", role_title="Operator")


@pytest.fixture
def manager(make_user):
    return make_user(Role.MANAGER, email="mona@example.com", name="Mona Manager")


@pytest.fixture
def project_manager(make_user):
    return make_user(Role.PROJECT_MANAGER, email="pete@example.com", name="Pete PM")


@pytest.fixture
def headers_for(app):
    def _headers(user):
        return {"Authorization": f"Bearer {generate_token(user)}"}
    return _headers

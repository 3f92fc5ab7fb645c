import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

SECRET_KEY = os.getenv("SECRET_KEY", "hr-ops-secret-key")

# Local SQLite by default, set DATABASE_URL for PostgreSQL
DEFAULT_DB = f"sqlite:///{os.path.join(BASE_DIR, 'hr_ops.db')}"


def _split(value):
    return [v.strip() for v in value.split(",") if v.strip()]


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", DEFAULT_DB)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = SECRET_KEY
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))

    CORS_ORIGINS = _split(os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ))
    FRAME_ANCESTORS = os.getenv("FRAME_ANCESTORS", "'self' http://localhost:8082")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", "4000"))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret-key"
    LOG_LEVEL = "WARNING"

"""
Application configuration.
Values come from the environment (optionally a .env file) with development defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SESSION_SECRET", "dev-session-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///task_manager.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Bearer tokens
    JWT_SECRET = os.getenv("JWT_SECRET") or SECRET_KEY
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_IN = int(os.getenv("JWT_EXPIRES_IN", "3600"))

    # werkzeug.security method string, e.g. "scrypt" or "pbkdf2:sha256:600000"
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE", "threading")
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", "5000"))
    ENVIRONMENT = os.getenv("FLASK_ENV", "development")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-for-testing-only"
    JWT_SECRET = "test-jwt-secret-for-testing-only"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    # Fast hashes keep the suite quick
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    SOCKETIO_ASYNC_MODE = "threading"
    ENVIRONMENT = "testing"

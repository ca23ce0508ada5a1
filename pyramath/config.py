# pyramath/config.py
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///pyramath.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "200 per hour; 50 per minute")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # "paired" (unique operands) or "range" (free sampling)
    PYRAMID_GENERATOR = os.environ.get("PYRAMID_GENERATOR", "paired")
    PYRAMID_LEADERBOARD_SIZE = int(os.environ.get("PYRAMID_LEADERBOARD_SIZE", "10"))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    RATELIMIT_ENABLED = False
    LOG_LEVEL = "DEBUG"

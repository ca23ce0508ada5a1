# pyramath/__init__.py
from __future__ import annotations
import os, secrets
import logging
from flask import Flask

from .db import db
from .config import Config
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

logger = logging.getLogger(__name__)

# --- extensions ---
migrate = Migrate()
# dev-friendly in-memory limiter; swap for redis in prod
limiter = Limiter(get_remote_address, storage_uri="memory://")


def create_app(config_class=Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object(config_class)
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError(
            "Missing SQLALCHEMY_DATABASE_URI (or DATABASE_URL). "
            "Set it via env or instance/config.py."
        )
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY") or secrets.token_hex(32)

    # ---------------------------
    # Logging
    # ---------------------------
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    for name in ("pyramath", "pyramath.games", "pyramath.games.core", "pyramath.games.pyramid"):
        logging.getLogger(name).setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .games.pyramid.routes import bp as pyramid_bp
    # routes file already sets url_prefix="/games/pyramid" in the blueprint
    app.register_blueprint(pyramid_bp)

    # ---------------------------
    # Tables + games catalog row
    # ---------------------------
    with app.app_context():
        from . import models  # noqa: F401
        from .games.pyramid.leaderboard import get_or_create_game
        db.create_all()
        get_or_create_game()
        db.session.commit()

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return resp

    logger.info("pyramath app ready (generator=%s)", app.config.get("PYRAMID_GENERATOR"))
    return app

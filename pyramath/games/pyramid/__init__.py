# pyramath/games/pyramid/__init__.py
from flask import Blueprint

bp = Blueprint(
    "pyramid",
    __name__,
    url_prefix="/games/pyramid",
)

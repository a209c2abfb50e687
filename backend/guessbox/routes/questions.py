from __future__ import annotations

from flask import Blueprint, jsonify

from ..game.questions import list_questions

bp = Blueprint("questions", __name__)


@bp.get("/questions")
def get_questions():
    return jsonify({"questions": list_questions()})

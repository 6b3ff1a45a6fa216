"""Main blueprint with health check endpoint."""
from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from weighbridge.database import get_session

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """
    Health check endpoint that validates database connection.

    Returns:
        200: {"ok": true, "db": true}
        500: {"ok": false, "error": "..."} (DB error)
    """
    try:
        session = get_session()
        row = session.execute(text("SELECT 1 AS ok")).fetchone()
        return jsonify({'ok': True, 'db': bool(row and row[0] == 1)}), 200
    except SQLAlchemyError as e:
        get_session().rollback()
        return jsonify({'ok': False, 'error': str(getattr(e, 'orig', None) or e)}), 500

from flask import Blueprint, jsonify, g

from fither.models.session import UserSession
from fither.auth import session_required
from fither.app import db

sessions_bp = Blueprint('sessions', __name__)


@sessions_bp.route('/active', methods=['GET'])
@session_required
def get_active_sessions():
    sessions = UserSession.query.filter_by(
        user_id=g.current_user.id,
        is_active=True
    ).order_by(UserSession.last_activity.desc()).all()

    current_session_id = g.current_session.session_id
    return jsonify([session.to_dict(current_session_id) for session in sessions])


@sessions_bp.route('/end/<session_id>', methods=['POST'])
@session_required
def end_session(session_id):
    # Only the owner may end a session, including the current one
    session = UserSession.query.filter_by(session_id=session_id, user_id=g.current_user.id).first()
    if not session:
        return jsonify({'error': 'Session not found'}), 404

    session.is_active = False
    db.session.commit()

    return jsonify({'message': 'Session ended successfully'})

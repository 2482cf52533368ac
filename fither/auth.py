from functools import wraps
from datetime import datetime
import logging

from flask import g, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, jwt_required

from fither.app import db
from fither.models.user import User
from fither.models.session import UserSession

logger = logging.getLogger(__name__)


def start_session(user):
    """Open a new login session for user and return (session, access_token)."""
    session = UserSession(
        user_id=user.id,
        user_agent=(request.headers.get('User-Agent') or 'Unknown')[:255],
        ip_address=request.remote_addr or 'Unknown'
    )
    db.session.add(session)
    db.session.commit()

    # Create access token with string identity, bound to the session
    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={'session_id': session.session_id}
    )
    return session, access_token


def session_required(fn):
    """
    Require a valid JWT whose session is still active and whose user is
    still activated. The session and user are exposed as g.current_session
    and g.current_user for the duration of the request.
    """
    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        user_id = int(get_jwt_identity())
        session = UserSession.query.filter_by(
            session_id=get_jwt().get('session_id'),
            user_id=user_id,
            is_active=True
        ).first()
        if not session:
            return jsonify({'error': 'Invalid or expired session'}), 401

        user = db.session.get(User, user_id)
        if not user:
            return jsonify({'error': 'Invalid or expired session'}), 401
        if not user.is_active:
            return jsonify({'error': 'Your account is not activated. Please contact an administrator.'}), 403

        session.last_activity = datetime.utcnow()
        db.session.commit()

        g.current_session = session
        g.current_user = user
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    @wraps(fn)
    @session_required
    def wrapper(*args, **kwargs):
        if not g.current_user.is_admin:
            logger.warning('User %s attempted admin action %s', g.current_user.id, request.path)
            return jsonify({'error': 'Access denied. Admin only.'}), 403
        return fn(*args, **kwargs)

    return wrapper


def can_access_user(user_id):
    return g.current_user.id == user_id or g.current_user.is_admin


def request_json():
    """The JSON request body as a dict; anything else counts as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

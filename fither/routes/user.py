from flask import Blueprint, jsonify, g
from datetime import datetime, timedelta
import logging

from fither.models.user import User, ROLE_ADMIN
from fither.auth import session_required, admin_required, can_access_user, request_json
from fither.routes.auth import password_error
from fither.app import db

user_bp = Blueprint('user', __name__)
logger = logging.getLogger(__name__)

RECENT_USER_DAYS = 7


def _user_not_found():
    return jsonify({'error': 'User not found'}), 404


@user_bp.route('', methods=['GET'])
@user_bp.route('/', methods=['GET'])
@admin_required
def get_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([user.to_dict() for user in users])


@user_bp.route('/stats', methods=['GET'])
@admin_required
def get_user_stats():
    """Account counts for the admin dashboard."""
    recent_cutoff = datetime.utcnow() - timedelta(days=RECENT_USER_DAYS)

    total = User.query.count()
    active = User.query.filter_by(is_active=True).count()

    return jsonify({
        'stats': {
            'total': total,
            'active': active,
            'inactive': total - active,
            'admins': User.query.filter_by(role=ROLE_ADMIN).count(),
            'recent': User.query.filter(User.created_at >= recent_cutoff).count()
        }
    })


@user_bp.route('/<int:user_id>', methods=['GET'])
@session_required
def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return _user_not_found()

    # Users can only view their own profile unless admin
    if not can_access_user(user_id):
        return jsonify({'error': 'Access denied'}), 403

    return jsonify(user.to_dict())


@user_bp.route('/<int:user_id>', methods=['PATCH'])
@session_required
def update_user(user_id):
    if not can_access_user(user_id):
        return jsonify({'error': 'Access denied'}), 403

    user = db.session.get(User, user_id)
    if not user:
        return _user_not_found()

    data = request_json()
    name = data.get('name')
    email = data.get('email')
    if not isinstance(name, (str, type(None))) or not isinstance(email, (str, type(None))):
        return jsonify({'error': 'name and email must be strings'}), 400

    # Check if email is already taken by another user
    if email and email != user.email:
        if User.query.filter(User.email == email, User.id != user_id).first():
            return jsonify({'error': 'Email already registered'}), 400

    if name:
        user.name = name
    if email:
        user.email = email

    db.session.commit()
    return jsonify(user.to_dict())


@user_bp.route('/<int:user_id>/status', methods=['PATCH'])
@admin_required
def update_user_status(user_id):
    data = request_json()
    is_active = data.get('is_active')
    if not isinstance(is_active, bool):
        return jsonify({'error': 'is_active must be true or false'}), 400

    user = db.session.get(User, user_id)
    if not user:
        return _user_not_found()

    user.is_active = is_active
    db.session.commit()
    logger.info('Admin %s set user %s active=%s', g.current_user.id, user_id, is_active)

    return jsonify(user.to_dict())


@user_bp.route('/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    # Don't allow deleting yourself
    if user_id == g.current_user.id:
        return jsonify({'error': 'Cannot delete your own account'}), 400

    user = db.session.get(User, user_id)
    if not user:
        return _user_not_found()

    db.session.delete(user)
    db.session.commit()
    logger.info('Admin %s deleted user %s', g.current_user.id, user_id)

    return jsonify({'message': 'User deleted successfully'})


@user_bp.route('/<int:user_id>/profile-picture', methods=['PATCH'])
@session_required
def update_profile_picture(user_id):
    if not can_access_user(user_id):
        return jsonify({'error': 'Access denied'}), 403

    user = db.session.get(User, user_id)
    if not user:
        return _user_not_found()

    data = request_json()
    profile_picture = data.get('profile_picture')
    if profile_picture is not None and not isinstance(profile_picture, str):
        return jsonify({'error': 'profile_picture must be a string or null'}), 400

    user.profile_picture = profile_picture
    db.session.commit()

    return jsonify(user.to_dict())


@user_bp.route('/<int:user_id>/password', methods=['PATCH'])
@session_required
def update_password(user_id):
    # Users can only update their own password
    if user_id != g.current_user.id:
        return jsonify({'error': 'Access denied. You can only change your own password.'}), 403

    data = request_json()
    current_password = data.get('current_password')
    new_password = data.get('new_password')

    if not isinstance(current_password, str) or not g.current_user.check_password(current_password):
        return jsonify({'error': 'Current password is incorrect'}), 401

    error = password_error(new_password, label='New password')
    if error:
        return jsonify({'error': error}), 400

    g.current_user.set_password(new_password)
    db.session.commit()
    logger.info('User %s changed password', user_id)

    return jsonify({'message': 'Password updated successfully'})

from flask import Blueprint, jsonify, g
import logging

from fither.models.user import User, ROLE_USER, MAX_PASSWORD_BYTES
from fither.auth import request_json, session_required, start_session
from fither.app import db

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def password_error(password, label='Password'):
    """Return an error message for an unacceptable password, or None."""
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return f'{label} must be at least {MIN_PASSWORD_LENGTH} characters'
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        return f'{label} must be at most {MAX_PASSWORD_BYTES} bytes'
    return None


@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request_json()

    for field in ('name', 'email', 'password'):
        if not isinstance(data.get(field), str) or not data[field].strip():
            return jsonify({'error': f'{field} is required'}), 400

    error = password_error(data['password'])
    if error:
        return jsonify({'error': error}), 400

    profile_picture = data.get('profile_picture')
    if profile_picture is not None and not isinstance(profile_picture, str):
        return jsonify({'error': 'profile_picture must be a string or null'}), 400

    # Check if user already exists
    if User.query.filter_by(email=data['email']).first():
        return jsonify({'error': 'Email already registered'}), 400

    # New accounts wait for an admin to activate them
    user = User(
        email=data['email'],
        password=data['password'],
        name=data['name'],
        role=ROLE_USER,
        is_active=False,
        profile_picture=profile_picture
    )

    db.session.add(user)
    db.session.commit()
    logger.info('New account %s registered, pending activation', user.id)

    return jsonify({
        'message': 'Account created successfully! Your account is pending activation.',
        'user': user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_json()

    email = data.get('email')
    password = data.get('password')
    if not isinstance(email, str) or not isinstance(password, str):
        return jsonify({'error': 'Invalid email or password'}), 401

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        logger.info('Failed login for %s', email)
        return jsonify({'error': 'Invalid email or password'}), 401

    if not user.is_active:
        return jsonify({'error': 'Your account is not activated yet. Please contact an administrator.'}), 403

    session, access_token = start_session(user)
    logger.info('User %s logged in (%s)', user.id, session.session_id)

    return jsonify({
        'message': 'Login successful',
        'access_token': access_token,
        'user': user.to_dict()
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@session_required
def logout():
    g.current_session.is_active = False
    db.session.commit()
    logger.info('User %s logged out (%s)', g.current_user.id, g.current_session.session_id)

    return jsonify({'message': 'Logged out successfully'})


@auth_bp.route('/me', methods=['GET'])
@session_required
def me():
    return jsonify(g.current_user.to_dict())

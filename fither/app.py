from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from datetime import timedelta
import logging
import os
from dotenv import load_dotenv

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = app.config.get('LOG_LEVEL', 'INFO')
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def server_error(error):
        original = getattr(error, 'original_exception', None) or error
        logger.error('Unhandled error: %s', original, exc_info=original)
        return jsonify({'error': 'Server error'}), 500

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({'error': 'No token provided'}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({'error': 'Invalid token'}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({'error': 'Invalid or expired session'}), 401


def create_app(config_name='development'):
    # Load environment variables
    load_dotenv()

    # Initialize Flask app
    app = Flask(__name__)

    # Configure the app based on environment
    if config_name == 'testing':
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['TESTING'] = True
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///fither.db')

    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-key-please-change')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-please-change-in-production')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(days=int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES_DAYS', '7')))
    app.config['DEFAULT_ACTIVITY_MULTIPLIER'] = float(os.getenv('DEFAULT_ACTIVITY_MULTIPLIER', '1.375'))
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()
    app.config['ADMIN_EMAIL'] = os.getenv('ADMIN_EMAIL', 'admin@fither.ai')
    app.config['ADMIN_PASSWORD'] = os.getenv('ADMIN_PASSWORD')

    configure_logging(app)

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)
    jwt.init_app(app)

    register_error_handlers(app)

    # Import routes after db initialization to avoid circular imports
    from fither.routes.auth import auth_bp
    from fither.routes.user import user_bp
    from fither.routes.sessions import sessions_bp
    from fither.routes.measurements import measurements_bp
    from fither.routes.calculator import calculator_bp
    from fither.routes.health import health_bp
    from fither.cli import register_commands

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(user_bp, url_prefix='/api/users')
    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
    app.register_blueprint(measurements_bp, url_prefix='/api/measurements')
    app.register_blueprint(calculator_bp, url_prefix='/api/calculator')
    app.register_blueprint(health_bp, url_prefix='/api')

    register_commands(app)

    logger.info('FitHer backend created (config=%s)', config_name)
    return app


if __name__ == '__main__':
    create_app().run(debug=True)

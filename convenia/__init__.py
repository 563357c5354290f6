"""
Convenia Application Factory
Partnership request submission and approval API
"""

import os
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from convenia.models import db, init_db
from convenia.routes import auth_bp, user_bp, request_bp
from convenia.commands import register_commands
from convenia.utils import (
    ConveniaError, setup_logging, log_info, log_error, create_response, error_response,
    ensure_directory_exists
)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Import and set configuration
    from config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Initialize extensions
    db.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    # Setup logging
    with app.app_context():
        setup_logging()
        log_info(f"Application initialized ({config_name})")

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(user_bp, url_prefix='/api/users')
    app.register_blueprint(request_bp, url_prefix='/api/requests')

    register_error_handlers(app)
    register_commands(app)

    @app.route('/api/health', methods=['GET'])
    def health_check():
        return jsonify({'success': True, 'status': 'Server is running'})

    ensure_directory_exists(app.config['UPLOAD_FOLDER'])

    # Create database tables; an unreachable database is reported by check-db
    try:
        init_db(app)
    except Exception as e:
        app.logger.warning(f"Database initialization warning: {e}")

    return app


def register_error_handlers(app: Flask) -> None:
    """Errors raised outside a route's own try block, e.g. by auth decorators"""

    @app.errorhandler(ConveniaError)
    def handle_application_error(e):
        return error_response(e)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify(create_response(False, e.description)), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        log_error("Unhandled error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Internal server error")), 500

"""
Flask Application Factory for the Adrevolution Backend.

create_app() builds an application for one configuration ('development',
'production' or 'testing'):
- Configuration loading
- Database, migrations, JWT and CORS extensions
- Blueprint registration for all API routes
- Error handlers rendering the standard JSON error body
- Logging (console, optional rotating file)
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from adrevolution.config import config
from adrevolution.extensions import db, migrate, jwt, cors
from adrevolution.utils.errors import AppError
from adrevolution.utils.responses import app_error_response, error_response

SERVICE_NAME = 'Adrevolution Backend'
VERSION = '1.0.0'


def create_app(config_name=None):
    """
    Application factory function to create and configure Flask app instance.

    Args:
        config_name: Configuration name ('development', 'production', 'testing')
                    If None, uses FLASK_ENV environment variable or defaults to 'development'

    Returns:
        Flask: Configured Flask application instance

    Example:
        app = create_app('testing')
    """
    app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    configure_logging(app)
    config_class.init_app(app)

    initialize_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)

    app.logger.info(f"{SERVICE_NAME} created with config '{config_name}' (debug={app.debug})")
    return app


def initialize_extensions(app):
    db.init_app(app)

    # Models must be imported before migrate/create_all can see their tables
    from adrevolution import models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    configure_jwt()

    # The session cookie needs credentialed CORS
    cors.init_app(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=app.config['CORS_ALLOW_CREDENTIALS'],
        max_age=app.config['CORS_MAX_AGE'],
        allow_headers=['Content-Type', 'Authorization'],
        methods=['GET', 'POST', 'PATCH', 'DELETE', 'OPTIONS']
    )


def configure_jwt():
    """
    Standard error bodies for routes protected by flask_jwt_extended directly.

    @jwt_required_custom renders its own 401s.
    """
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response(
            'UNAUTHORIZED', 'The token has expired. Please sign in again.', status_code=401
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return error_response('UNAUTHORIZED', 'Invalid access token', reason, status_code=401)

    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return error_response('UNAUTHORIZED', 'Authentication required', reason, status_code=401)


def register_blueprints(app):
    from adrevolution.routes import (
        auth_bp,
        users_bp,
        account_bp,
        company_bp,
        business_hours_bp,
        communications_bp,
        permissions_bp,
        labour_cost_bp,
        resources_bp,
    )

    for blueprint in (
        auth_bp,
        users_bp,
        account_bp,
        company_bp,
        business_hours_bp,
        communications_bp,
        permissions_bp,
        labour_cost_bp,
        resources_bp,
    ):
        app.register_blueprint(blueprint)

    @app.route('/health')
    def health_check():
        """Health check endpoint for monitoring."""
        return jsonify({'status': 'healthy', 'service': SERVICE_NAME, 'version': VERSION}), 200

    @app.route('/')
    def index():
        return jsonify({
            'service': SERVICE_NAME,
            'version': VERSION,
            'status': 'running',
            'endpoints': sorted(
                rule.rule for rule in app.url_map.iter_rules() if rule.endpoint != 'static'
            ),
        }), 200


def register_error_handlers(app):
    """
    Render every error with the standard JSON error body.

    - AppError: raised by services, carries its own code and status
    - HTTPException: routing and framework errors (404, 405, malformed JSON...)
    - Exception: anything else is logged with traceback, the session is
      rolled back and a 500 is returned
    """
    @app.errorhandler(AppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{error.error_code}: {error.message}")
        else:
            app.logger.info(f"{error.error_code}: {error.message}")
        return app_error_response(error)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        code = error.name.upper().replace(' ', '_')
        return error_response(code, error.description, status_code=error.code)

    @app.errorhandler(Exception)
    def handle_exception(error):
        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        db.session.rollback()
        return error_response('INTERNAL_ERROR', 'An unexpected error occurred', status_code=500)


def configure_logging(app):
    """
    Attach handlers to app.logger ('adrevolution').

    Module loggers (logging.getLogger(__name__)) live under the same name and
    propagate here. Settings: LOG_LEVEL, LOG_FORMAT, LOG_FILE (file logging
    off when empty), LOG_MAX_BYTES, LOG_BACKUP_COUNT.
    """
    log_level = getattr(logging, app.config['LOG_LEVEL'].upper(), logging.INFO)
    formatter = logging.Formatter(app.config['LOG_FORMAT'])

    # Replaces Flask's default handler; create_app may run many times per process
    for handler in list(app.logger.handlers):
        app.logger.removeHandler(handler)
    app.logger.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    app.logger.addHandler(console_handler)

    log_file = app.config.get('LOG_FILE')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=app.config['LOG_MAX_BYTES'],
            backupCount=app.config['LOG_BACKUP_COUNT']
        )
        file_handler.setFormatter(formatter)
        app.logger.addHandler(file_handler)


def register_shell_context(app):
    @app.shell_context_processor
    def make_shell_context():
        from adrevolution.models import (
            User,
            Company,
            CompanyMembership,
            UserPosition,
            Permission,
            Resource,
        )

        return {
            'db': db,
            'User': User,
            'Company': Company,
            'CompanyMembership': CompanyMembership,
            'UserPosition': UserPosition,
            'Permission': Permission,
            'Resource': Resource,
        }

"""
Task Manager API application factory.
Wires configuration, database, bearer-token auth, Socket.IO and blueprints.
"""

import logging

from flask import Flask
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from services.errors import ServiceError
from services.notification_broadcaster import NotificationBroadcaster
from utils.api_response import error_response
from utils.auth import login_manager
from utils.startup_validation import validate_startup

logger = logging.getLogger(__name__)

socketio = SocketIO()


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        )
    root.setLevel(level)


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        db.session.rollback()
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        db.session.rollback()
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return error_response('Internal server error', 500)


def register_blueprints(app: Flask) -> None:
    from routes.auth import auth_bp
    from routes.admin import admin_bp
    from routes.api_tasks import api_tasks_bp
    from routes.comments import comments_bp
    from routes.user import user_bp
    from routes.health import health_bp

    for blueprint in (auth_bp, admin_bp, api_tasks_bp, comments_bp, user_bp, health_bp):
        app.register_blueprint(blueprint)


def create_app(config_class=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config['LOG_LEVEL'])

    db.init_app(app)
    login_manager.init_app(app)

    register_blueprints(app)
    register_error_handlers(app)

    socketio.init_app(
        app,
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
        cors_allowed_origins=app.config['CORS_ALLOWED_ORIGINS'],
    )
    from routes.notifications_websocket import register_notifications_namespace
    register_notifications_namespace(socketio)
    NotificationBroadcaster.init_app(socketio)

    with app.app_context():
        db.create_all()

    validate_startup(app)
    logger.info(f"Task Manager API ready ({app.config['ENVIRONMENT']})")
    return app

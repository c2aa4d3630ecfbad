"""Flask application factory."""

from __future__ import annotations

import logging
from flask import Flask, jsonify
from flask_cors import CORS
from redis import Redis
from rq import Queue
from werkzeug.exceptions import RequestEntityTooLarge

from ..config import APP_CONFIG, QUEUE_CONFIG
from ..core.exceptions import ArchiveFormatError, ProcessingError
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = APP_CONFIG.max_upload_bytes

    CORS(app)
    app.register_blueprint(api_bp, url_prefix="/api")

    redis_connection = Redis.from_url(QUEUE_CONFIG.redis_url)
    queue = Queue(
        name=QUEUE_CONFIG.queue_name,
        connection=redis_connection,
        default_timeout=QUEUE_CONFIG.default_timeout,
    )
    app.extensions["rq"] = {"queue": queue, "connection": redis_connection}

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.errorhandler(ProcessingError)
    def handle_processing_error(exc: ProcessingError):
        status = 400 if isinstance(exc, ArchiveFormatError) else 422
        logger.warning("Rejected archive: %s", exc)
        return jsonify({"error": exc.as_dict()}), status

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(exc: RequestEntityTooLarge):
        return jsonify({"error": f"Archive exceeds {APP_CONFIG.max_archive_size_mb} MB"}), 413

    logger.info("Flask application initialised")
    return app

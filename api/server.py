import logging

from flask import Flask, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from core import config
from routes.scripture_api import EXTENSION_KEY, scripture_bp
from utils.errors import error_response, not_found, server_error

logger = logging.getLogger(__name__)


def create_app(service=None) -> Flask:
    """
    Build the Flask application.

    Args:
        service: ScriptureService to use (created lazily when omitted)
    """
    app = Flask(__name__)

    # Keep Cyrillic readable and preserve field order
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    CORS(
        app,
        origins="*",
        methods=["GET"],
        allow_headers=["Content-Type"],
        send_wildcard=True,
    )

    if service is not None:
        app.extensions[EXTENSION_KEY] = service

    # Register blueprints
    app.register_blueprint(scripture_bp)

    # Only GET is served; OPTIONS is let through for CORS preflight
    @app.before_request
    def reject_other_methods():
        if request.method == "GET":
            return None
        if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
            return None
        return not_found("route")

    # Unknown paths and unsupported methods are both plain 404s
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_unknown_route(e):
        return not_found("route")

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return error_response(e.name.lower().replace(" ", "_"), e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error")
        return server_error()

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info(f"Listening {config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT)

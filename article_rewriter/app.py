"""
Flask application exposing the rewrite endpoint.

The view is the single error boundary: every failure is turned into a JSON
``{"error": ...}`` response with the status code of its error class.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from .config import AppConfig
from .core.errors import InputError, MethodError, RewriterError
from .core.types import RewriteRequest
from .logging_utils import log_event
from .runner import RewriteService, build_service


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}

_ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(cfg: AppConfig | None = None, service: RewriteService | None = None) -> Flask:
    """Build the Flask app.

    Args:
        cfg: Runtime configuration, defaults when omitted
        service: Prebuilt pipeline; built from ``cfg`` when omitted
    """
    cfg = cfg or AppConfig()
    service = service or build_service(cfg)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions["article_rewriter"] = service

    def rewrite() -> tuple[Response, int] | Response:
        if cfg.server.cors and request.method == "OPTIONS":
            return Response(status=200)
        try:
            if request.method != "POST":
                raise MethodError()
            payload = request.get_json(silent=True)
            rewrite_request = RewriteRequest.from_payload(payload if isinstance(payload, dict) else {})
            if not rewrite_request.url:
                raise InputError("URL is required")
            result = service.run(rewrite_request)
        except RewriterError as exc:
            log_event(
                logger,
                "Request failed",
                level=logging.WARNING,
                error_type=type(exc).__name__,
                error=exc.message,
                status_code=exc.status_code,
            )
            return _error(exc.message, exc.status_code)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while rewriting")
            return _error(str(exc) or "Internal server error", 500)
        return jsonify(result.to_dict()), 200

    for rule, endpoint in (("/api/rewrite", "rewrite"), ("/", "root_rewrite")):
        app.add_url_rule(
            rule,
            endpoint=endpoint,
            view_func=rewrite,
            methods=_ROUTE_METHODS,
            provide_automatic_options=False,
        )

    @app.errorhandler(405)
    def method_not_allowed(exc: Exception) -> tuple[Response, int]:
        return _error(MethodError().message, MethodError.status_code)

    if cfg.server.cors:

        @app.after_request
        def add_cors_headers(resp: Response) -> Response:
            for key, value in CORS_HEADERS.items():
                resp.headers[key] = value
            return resp

    return app


def _error(message: str, status_code: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status_code

"""HTTP server of the item shop."""

from __future__ import annotations

import argparse
import concurrent.futures
import functools
import logging
import re
import signal
import threading
from socketserver import ThreadingMixIn
from typing import Any, Callable, Sequence
from wsgiref.simple_server import WSGIServer, make_server

from flask import Flask, Response, copy_current_request_context, request
from sqlalchemy.orm import Session

from .config import Config, get_config, load_config
from .controller import ItemShopController, error_response
from .database import get_database
from .repository import ItemShopRepository
from .service import ItemShopService

_ALLOW_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
_ALLOW_HEADERS = ("Origin", "Content-Type", "Accept")
_HANDLED_ERRORS = (400, 404, 405, 413, 500)

_LIMIT_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s?([KMGTPE]B?|B?)$", re.IGNORECASE)
_UNITS = {"": 0, "B": 0, "K": 1, "M": 2, "G": 3, "T": 4, "P": 5, "E": 6}


def parse_body_limit(limit: str) -> int:
    """Return the byte count of a size such as ``"2M"`` or ``"512KB"``.

    Units are powers of 1024. Raises :class:`ValueError` on a bad size.
    """
    match = _LIMIT_PATTERN.match(limit.strip())
    if match is None:
        raise ValueError(f"invalid body limit: {limit!r}")
    number, unit = match.groups()
    power = _UNITS[unit.upper()[:1]]
    return int(float(number) * 1024**power)


def _origin_allowed(origin: str, allowed: Sequence[str]) -> str | None:
    if "*" in allowed:
        return "*"
    return origin if origin in allowed else None


def _install_cors(app: Flask, allow_origins: Sequence[str]) -> None:
    def allowed_origin() -> str | None:
        origin = request.headers.get("Origin")
        if not origin:
            return None
        return _origin_allowed(origin, allow_origins)

    @app.before_request
    def preflight() -> Response | None:
        if request.method != "OPTIONS":
            return None
        response = Response(status=204)
        response.vary.add("Origin")
        response.vary.add("Access-Control-Request-Method")
        response.vary.add("Access-Control-Request-Headers")
        origin = allowed_origin()
        if origin is not None:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Methods"] = ",".join(_ALLOW_METHODS)
            response.headers["Access-Control-Allow-Headers"] = ",".join(_ALLOW_HEADERS)
        return response

    @app.after_request
    def simple(response: Response) -> Response:
        if request.method == "OPTIONS":
            return response
        response.vary.add("Origin")
        origin = allowed_origin()
        if origin is not None:
            response.headers["Access-Control-Allow-Origin"] = origin
        return response


def _install_body_limit(app: Flask, limit: int) -> None:
    app.config["MAX_CONTENT_LENGTH"] = limit

    @app.before_request
    def check_length() -> Response | None:
        length = request.content_length
        if length is not None and length > limit:
            return error_response(413, "Request Entity Too Large")
        return None


def _with_timeout(view: Callable[..., Any], seconds: float,
                  executor: concurrent.futures.Executor) -> Callable[..., Any]:
    @functools.wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        future = executor.submit(copy_current_request_context(view), *args, **kwargs)
        try:
            return future.result(timeout=seconds)
        except concurrent.futures.TimeoutError:
            return Response("Request Timeout", status=503, mimetype="text/plain")

    return wrapper


def _health_check() -> Response:
    return Response("OK", status=200, mimetype="text/plain")


def create_app(conf: Config, session_factory: Callable[[], Session]) -> Flask:
    """Build the web application with its middleware and routes."""
    app = Flask(__name__)
    app.logger.setLevel(logging.DEBUG)
    server_conf = conf.server

    _install_cors(app, list(server_conf.allow_origins))
    _install_body_limit(app, parse_body_limit(server_conf.body_limit))

    def handle_error(error: Any) -> Response:
        return error_response(error.code, error.name)

    for code in _HANDLED_ERRORS:
        app.register_error_handler(code, handle_error)

    executor = concurrent.futures.ThreadPoolExecutor(thread_name_prefix="isekaishop-request")
    timeout = server_conf.timeout

    app.add_url_rule(
        "/v1/health", "health", _with_timeout(_health_check, timeout, executor), methods=["GET"]
    )

    repository = ItemShopRepository(session_factory, app.logger)
    controller = ItemShopController(ItemShopService(repository))
    app.add_url_rule(
        "/v1/item-shop",
        "item_shop_listing",
        _with_timeout(controller.listing, timeout, executor),
        methods=["GET"],
    )
    return app


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def serve(conf: Config, app: Flask) -> None:
    """Serve ``app`` until SIGINT or SIGTERM, then shut down gracefully.

    Must be called from the main thread.
    """
    httpd = make_server("", conf.server.port, app, server_class=_ThreadingWSGIServer)

    def request_shutdown(signum: int, frame: Any) -> None:
        app.logger.info("Shutting down server...")
        threading.Thread(target=httpd.shutdown, daemon=True).start()

    previous = {sig: signal.signal(sig, request_shutdown) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        app.logger.info("Listening on :%d", conf.server.port)
        httpd.serve_forever()
    finally:
        httpd.server_close()
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration, connect to the database and serve."""
    parser = argparse.ArgumentParser(description="Run the item shop HTTP server.")
    parser.add_argument("--config", help="path of the YAML configuration file")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG)
    conf = get_config() if args.config is None else load_config(args.config)
    db = get_database(conf.database)
    serve(conf, create_app(conf, db.session))
    return 0
"""WSGI application that routes the booking API, and the server entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from bookingsys.config import load_db_config
from bookingsys.database import DatabaseError, create_engine_from_config
from bookingsys.handlers import BookingHandler, ResourceHandler, UserHandler
from bookingsys.repos import BookingRepo, ResourceRepo, UserRepo
from bookingsys.services import BookingService, ResourceService, UserService

View = Callable[[Request], Response]

DEFAULT_PORT = 9090


@dataclass(frozen=True)
class _Route:
    method: str
    pattern: str
    view: View

    def matches_path(self, path: str) -> bool:
        """A pattern ending in '/' matches a whole subtree; others match exactly."""
        if self.pattern.endswith("/"):
            return path.startswith(self.pattern)
        return path == self.pattern

    def allows(self, method: str) -> bool:
        return method == self.method or (self.method == "GET" and method == "HEAD")


class BookingApp:
    """Dispatch requests to views by method and path pattern."""

    def __init__(self, routes: Iterable[tuple[str, str, View]]) -> None:
        self._routes = [_Route(method, pattern, view) for method, pattern, view in routes]

    def _dispatch(self, request: Request) -> Response:
        path = request.path
        by_path = [route for route in self._routes if route.matches_path(path)]
        if not by_path:
            return Response("404 page not found\n", status=404, content_type="text/plain; charset=utf-8")
        allowed = [route for route in by_path if route.allows(request.method)]
        if not allowed:
            methods = sorted({route.method for route in by_path} | (
                {"HEAD"} if any(route.method == "GET" for route in by_path) else set()
            ))
            response = Response(
                "Method Not Allowed\n", status=405, content_type="text/plain; charset=utf-8"
            )
            response.headers["Allow"] = ", ".join(methods)
            return response
        best = max(allowed, key=lambda route: len(route.pattern))
        return best.view(request)

    def wsgi_app(self, environ, start_response):
        request = Request(environ)
        response = self._dispatch(request)
        return response(environ, start_response)

    def __call__(self, environ, start_response):
        return self.wsgi_app(environ, start_response)


def create_app(engine: Engine) -> BookingApp:
    """Wire repositories, services and handlers over engine into an application."""
    booking_service = BookingService(BookingRepo(engine))
    resource_service = ResourceService(ResourceRepo(engine))
    user_service = UserService(UserRepo(engine))

    users = UserHandler(user_service, booking_service)
    resources = ResourceHandler(resource_service)
    bookings = BookingHandler(booking_service)

    return BookingApp(
        [
            ("POST", "/api/users", users.register),
            ("GET", "/api/resources", resources.get_resources),
            ("POST", "/api/bookings", bookings.create_booking),
            ("GET", "/api/bookings/", bookings.get_id),
            ("GET", "/api/users/", users.get_bookings_by_user_id),
        ]
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Connect to the database from DB_* settings and serve the API."""
    parser = argparse.ArgumentParser(description="Run the booking API server.")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--env-file", default=None, help="file with DB_* settings")
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    cfg = load_db_config()
    try:
        engine = create_engine_from_config(cfg)
    except DatabaseError as exc:
        print(f"database error: {exc}", file=sys.stderr)
        return 1
    print("database connected successfully")

    try:
        print(f"server starting :{args.port}")
        run_simple(args.host or "0.0.0.0", args.port, create_app(engine), threaded=True)
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
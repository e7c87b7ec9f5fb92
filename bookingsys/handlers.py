"""HTTP handlers that expose the services as a JSON API."""

from __future__ import annotations

import json
import logging
import re
from http import HTTPStatus
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.wrappers import Request, Response

from bookingsys.services import (
    BookingDTO,
    BookingService,
    RegisterUserDTO,
    ResourceService,
    UserService,
)

log = logging.getLogger(__name__)

_JSON = "application/json"
_FAILURES = (ValueError, LookupError, SQLAlchemyError)
_INT = re.compile(r"[+-]?[0-9]+")
_NO_BODY = object()


class _DecodeError(ValueError):
    pass


def _respond(status: HTTPStatus, payload: Any = _NO_BODY) -> Response:
    body = "" if payload is _NO_BODY else json.dumps(payload, ensure_ascii=False) + "\n"
    return Response(body, status=int(status), content_type=_JSON)


def _decode_object(raw: bytes) -> dict[str, Any]:
    """Decode the first JSON value of raw, which must be an object or null."""
    try:
        text = raw.decode("utf-8").lstrip()
        data, _ = json.JSONDecoder().raw_decode(text)
    except (ValueError, UnicodeDecodeError) as exc:
        raise _DecodeError(str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _DecodeError("expected a JSON object")
    return data


def _field(data: dict[str, Any], name: str, kind: type) -> Any:
    """Look up name (case-insensitively) and check its JSON type."""
    if name in data:
        value = data[name]
    else:
        value = next(
            (v for k, v in data.items() if k.casefold() == name.casefold()), None
        )
    if value is None:
        return kind()
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _DecodeError(f"field {name} must be an integer")
    elif not isinstance(value, kind):
        raise _DecodeError(f"field {name} has the wrong type")
    return value


def _parse_int(text: str) -> int | None:
    return int(text) if _INT.fullmatch(text) else None


def _list_or_null(items: list) -> list[dict[str, Any]] | None:
    return [item.to_dict() for item in items] or None


class BookingHandler:
    def __init__(self, booking_service: BookingService) -> None:
        self._bookings = booking_service

    def create_booking(self, request: Request) -> Response:
        if request.method != "POST":
            return _respond(HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            data = _decode_object(request.get_data())
            dto = BookingDTO(
                user_id=_field(data, "user_id", int),
                resource_id=_field(data, "resource_id", int),
            )
        except _DecodeError:
            return _respond(HTTPStatus.BAD_REQUEST, {"error": "invalid JSON"})
        log.debug("dto.user_id=%d, dto.resource_id=%d", dto.user_id, dto.resource_id)

        try:
            self._bookings.create_booking(dto)
        except _FAILURES as exc:
            return _respond(HTTPStatus.BAD_REQUEST, {"error": str(exc)})
        return _respond(HTTPStatus.CREATED)

    def get_id(self, request: Request) -> Response:
        if request.method != "GET":
            return _respond(HTTPStatus.METHOD_NOT_ALLOWED)
        parts = request.path.split("/")
        if len(parts) != 4 or not parts[3]:
            return _respond(HTTPStatus.BAD_REQUEST)
        booking_id = _parse_int(parts[3])
        if booking_id is None:
            return _respond(HTTPStatus.BAD_REQUEST)
        try:
            booking = self._bookings.get_by_id(booking_id)
        except _FAILURES:
            return _respond(HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.OK, booking.to_dict())


class ResourceHandler:
    def __init__(self, resource_service: ResourceService) -> None:
        self._resources = resource_service

    def get_resources(self, request: Request) -> Response:
        if request.method != "GET":
            return _respond(HTTPStatus.METHOD_NOT_ALLOWED)
        only_available = request.args.get("available", "") == "true"
        try:
            resources = self._resources.get_resources(only_available)
        except _FAILURES:
            return _respond(HTTPStatus.INTERNAL_SERVER_ERROR)
        return _respond(HTTPStatus.OK, _list_or_null(resources))


class UserHandler:
    def __init__(self, user_service: UserService, booking_service: BookingService) -> None:
        self._users = user_service
        self._bookings = booking_service

    def register(self, request: Request) -> Response:
        if request.method != "POST":
            return _respond(HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            data = _decode_object(request.get_data())
            dto = RegisterUserDTO(
                email=_field(data, "email", str),
                name=_field(data, "name", str),
                password=_field(data, "password", str),
            )
        except _DecodeError:
            return _respond(HTTPStatus.BAD_REQUEST)
        try:
            user = self._users.register(dto)
        except _FAILURES:
            return _respond(HTTPStatus.BAD_REQUEST)
        # The body is written before any status is set, so the reply is 200.
        return _respond(HTTPStatus.OK, user.to_dict())

    def get_bookings_by_user_id(self, request: Request) -> Response:
        if request.method != "GET":
            return _respond(HTTPStatus.METHOD_NOT_ALLOWED)
        parts = request.path.split("/")
        if len(parts) != 5 or parts[2] != "users" or parts[4] != "bookings":
            return _respond(HTTPStatus.BAD_REQUEST)
        user_id = _parse_int(parts[3])
        if user_id is None:
            return _respond(HTTPStatus.BAD_REQUEST)
        try:
            bookings = self._bookings.get_by_user_id(user_id)
        except _FAILURES:
            return _respond(HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.OK, _list_or_null(bookings))
"""Business rules for bookings, resources and user registration."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bookingsys.models import Booking, BookingStatus, Resource, User
from bookingsys.repos import BookingRepo, ResourceRepo, UserRepo

log = logging.getLogger(__name__)


class ServiceError(ValueError):
    """Raised when a request to a service is rejected."""


@dataclass
class BookingDTO:
    """Input for creating a booking."""

    user_id: int = 0
    resource_id: int = 0


@dataclass
class RegisterUserDTO:
    """Input for registering a user."""

    email: str = ""
    name: str = ""
    password: str = ""


class BookingService:
    def __init__(self, booking_repo: BookingRepo) -> None:
        self._repo = booking_repo

    def create_booking(self, dto: BookingDTO) -> Booking:
        """Create a pending booking; return it with its id and time filled in."""
        log.info("create booking: user_id=%d, resource_id=%d", dto.user_id, dto.resource_id)
        if dto.user_id == 0:
            log.info("invalid user_id: %d", dto.user_id)
            raise ServiceError("invalid user_id")
        if dto.resource_id <= 0:
            log.info("invalid resource_id: %d", dto.resource_id)
            raise ServiceError("invalid resource_id")

        booking = Booking(
            user_id=dto.user_id,
            resource_id=dto.resource_id,
            status=BookingStatus.PENDING,
        )
        log.info("booking create: %r", booking)
        try:
            booking.validate()
        except ValueError as exc:
            log.info("booking validation failed: %s", exc)
            raise
        try:
            self._repo.create(booking)
        except Exception as exc:
            log.info("booking storage failed: %s", exc)
            raise
        log.info("booking created: id=%d", booking.id)
        return booking

    def get_by_id(self, booking_id: int) -> Booking:
        if booking_id <= 0:
            raise ServiceError("invalid booking id")
        return self._repo.get_by_id(booking_id)

    def get_by_user_id(self, user_id: int) -> list[Booking]:
        if user_id <= 0:
            raise ServiceError("invalid user_id")
        return self._repo.get_by_user_id(user_id)


class ResourceService:
    def __init__(self, resource_repo: ResourceRepo) -> None:
        self._repo = resource_repo

    def get_resources(self, only_available: bool) -> list[Resource]:
        """Return every resource, or only the available ones."""
        if only_available:
            return self._repo.get_available(True)
        return self._repo.get_all()


class UserService:
    def __init__(self, user_repo: UserRepo) -> None:
        self._repo = user_repo

    def register(self, dto: RegisterUserDTO) -> User:
        """Check the input, store the user and return it as stored."""
        if not dto.email:
            raise ServiceError("email is required")
        if "@" not in dto.email or "." not in dto.email:
            raise ServiceError("invalid email format")
        if not dto.password:
            raise ServiceError("password is required")
        if len(dto.password.encode("utf-8")) < 6:
            raise ServiceError("password must be at least 6 characters")

        user = User(name=dto.name, email=dto.email, password=dto.password)
        user.validate()
        self._repo.create(user)
        return self._repo.get_by_email(dto.email)
"""Domain objects of the booking system and their validation rules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class ValidationError(ValueError):
    """Raised when a domain object breaks one of its rules."""


class BookingStatus(StrEnum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class ResourceType(StrEnum):
    TABLE = "table"
    DOCTOR = "doctor"
    MEETING_ROOM = "meeting_room"


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


@dataclass
class Booking:
    id: int = 0
    user_id: int = 0
    resource_id: int = 0
    status: str = ""
    booked_at: datetime | None = None

    def validate(self) -> None:
        """Raise ValidationError if the booking is not well formed."""
        if self.user_id <= 0:
            raise ValidationError("invalid user_id")
        if self.resource_id <= 0:
            raise ValidationError("invalid resource_id")
        if not self.status:
            raise ValidationError("booking status is required")
        if self.status not in {s.value for s in BookingStatus}:
            raise ValidationError("status must be: pending, confirmed, cancelled")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "resource_id": self.resource_id,
            "status": str(self.status),
            "booked_at": _iso(self.booked_at),
        }


@dataclass
class Resource:
    id: int = 0
    name: str = ""
    type: str = ""
    is_available: bool = False
    created_at: datetime | None = None

    def validate(self) -> None:
        """Raise ValidationError if the resource is not well formed."""
        if not self.name:
            raise ValidationError("resource name is required")
        if not self.type:
            raise ValidationError("resource type is required")
        if self.type not in {t.value for t in ResourceType}:
            raise ValidationError("type must be: doctor, table, meeting_room")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": str(self.type),
            "is_available": self.is_available,
            "created_at": _iso(self.created_at),
        }


@dataclass
class User:
    id: int = 0
    email: str = ""
    name: str = ""
    password: str = ""
    created_at: datetime | None = None

    def validate(self) -> None:
        """Raise ValidationError if the user is not well formed."""
        if not self.email:
            raise ValidationError("email is required")
        if "@" not in self.email or "." not in self.email:
            raise ValidationError("invalid email format")
        if not self.password:
            raise ValidationError("password is required")
        if len(self.password.encode("utf-8")) < 6:
            raise ValidationError("password must be at least 6 characters")

    def to_dict(self) -> dict[str, Any]:
        """JSON form of the user; the password is never included."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "created_at": _iso(self.created_at),
        }
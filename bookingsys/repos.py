"""Storage of users, resources and bookings."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    func,
    insert,
    select,
    true,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookingsys.models import Booking, Resource, User

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String, nullable=False),
    Column("name", String, nullable=False, default=""),
    Column("password", String, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

resources_table = Table(
    "resources",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("type", String, nullable=False),
    Column("is_available", Boolean, nullable=False, server_default=true()),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

bookings_table = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False),
    Column("resource_id", Integer, nullable=False),
    Column("status", String, nullable=False),
    Column("booked_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


class NotFoundError(LookupError):
    """Raised when a requested row does not exist."""


class BookingRepo:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, booking: Booking) -> Booking:
        """Insert booking and fill in its id and booked_at."""
        stmt = (
            insert(bookings_table)
            .values(
                user_id=booking.user_id,
                resource_id=booking.resource_id,
                status=str(booking.status),
            )
            .returning(bookings_table.c.id, bookings_table.c.booked_at)
        )
        with self._engine.begin() as conn:
            row = conn.execute(stmt).one()
        booking.id, booking.booked_at = row.id, row.booked_at
        return booking

    def get_by_id(self, booking_id: int) -> Booking:
        stmt = select(bookings_table).where(bookings_table.c.id == booking_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            raise NotFoundError(f"booking {booking_id} not found")
        return Booking(**row._mapping)

    def get_by_user_id(self, user_id: int) -> list[Booking]:
        stmt = (
            select(bookings_table)
            .where(bookings_table.c.user_id == user_id)
            .order_by(bookings_table.c.id)
        )
        with self._engine.connect() as conn:
            return [Booking(**row._mapping) for row in conn.execute(stmt)]


class ResourceRepo:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _fetch(self, stmt) -> list[Resource]:
        with self._engine.connect() as conn:
            return [Resource(**row._mapping) for row in conn.execute(stmt)]

    def get_all(self) -> list[Resource]:
        return self._fetch(select(resources_table).order_by(resources_table.c.id))

    def get_by_id(self, resource_id: int) -> Resource:
        found = self._fetch(select(resources_table).where(resources_table.c.id == resource_id))
        if not found:
            raise NotFoundError(f"resource {resource_id} not found")
        return found[0]

    def get_available(self, is_available: bool) -> list[Resource]:
        return self._fetch(
            select(resources_table)
            .where(resources_table.c.is_available == is_available)
            .order_by(resources_table.c.id)
        )


class UserRepo:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, user: User) -> User:
        """Insert user and fill in its id and created_at."""
        stmt = (
            insert(users_table)
            .values(email=user.email, name=user.name, password=user.password)
            .returning(users_table.c.id, users_table.c.created_at)
        )
        with self._engine.begin() as conn:
            row = conn.execute(stmt).one()
        user.id, user.created_at = row.id, row.created_at
        return user

    def _get_one(self, condition, what: str) -> User:
        stmt = select(users_table).where(condition).order_by(users_table.c.id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise NotFoundError(f"user {what} not found") from exc
        if row is None:
            raise NotFoundError(f"user {what} not found")
        return User(**row._mapping)

    def get_by_id(self, user_id: int) -> User:
        return self._get_one(users_table.c.id == user_id, str(user_id))

    def get_by_email(self, email: str) -> User:
        return self._get_one(users_table.c.email == email, email)
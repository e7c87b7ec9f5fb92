from datetime import datetime

import pytest

from bookingsys.models import (
    Booking,
    BookingStatus,
    Resource,
    ResourceType,
    User,
    ValidationError,
)


def test_every_booking_status_validates():
    accepted = set()
    for status in BookingStatus:
        booking = Booking(user_id=1, resource_id=1, status=status)
        booking.validate()
        accepted.add(booking.to_dict()["status"])
    assert accepted == {"confirmed", "pending", "cancelled"}


def test_every_resource_type_validates():
    accepted = set()
    for rtype in ResourceType:
        resource = Resource(name="Room", type=rtype)
        resource.validate()
        accepted.add(resource.to_dict()["type"])
    assert accepted == {"table", "doctor", "meeting_room"}


@pytest.mark.parametrize("status", ["pending", "confirmed", "cancelled", BookingStatus.PENDING])
def test_booking_valid(status):
    booking = Booking(user_id=1, resource_id=2, status=status)
    booking.validate()
    assert booking.status == str(status)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_id": 0, "resource_id": 1, "status": "pending"},
        {"user_id": -3, "resource_id": 1, "status": "pending"},
        {"user_id": 1, "resource_id": 0, "status": "pending"},
        {"user_id": 1, "resource_id": 1, "status": ""},
        {"user_id": 1, "resource_id": 1, "status": "done"},
    ],
)
def test_booking_invalid(kwargs):
    with pytest.raises(ValidationError):
        Booking(**kwargs).validate()


def test_booking_to_dict_round_trip():
    moment = datetime(2024, 5, 1, 10, 30)
    booking = Booking(id=7, user_id=1, resource_id=2, status="pending", booked_at=moment)
    data = booking.to_dict()
    assert data["id"] == 7
    assert data["status"] == "pending"
    assert datetime.fromisoformat(data["booked_at"]) == moment


def test_booking_to_dict_without_time():
    assert Booking(user_id=1, resource_id=1, status="pending").to_dict()["booked_at"] is None


@pytest.mark.parametrize("rtype", ["table", "doctor", "meeting_room"])
def test_resource_valid(rtype):
    resource = Resource(name="Room A", type=rtype)
    resource.validate()
    assert resource.to_dict()["type"] == rtype


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "type": "table"},
        {"name": "Room", "type": ""},
        {"name": "Room", "type": "sofa"},
    ],
)
def test_resource_invalid(kwargs):
    with pytest.raises(ValidationError):
        Resource(**kwargs).validate()


def test_user_valid_and_name_optional():
    password = "password"
    user = User(email="ann@example.com", name="", password=password)
    user.validate()
    assert user.to_dict()["email"] == "ann@example.com"


def test_user_to_dict_hides_password():
    password = "password"
    data = User(id=3, email="ann@example.com", name="Ann", password=password).to_dict()
    assert "password" not in data
    assert data["name"] == "Ann"


@pytest.mark.parametrize("email", ["", "ann.example.com", "ann@example"])
def test_user_bad_email(email):
    password = "password"
    with pytest.raises(ValidationError):
        User(email=email, password=password).validate()


def test_user_missing_password():
    with pytest.raises(ValidationError):
        User(email="ann@example.com").validate()


def test_user_short_password():
    password = "token"
    with pytest.raises(ValidationError):
        User(email="ann@example.com", password=password).validate()
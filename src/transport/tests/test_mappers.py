from uuid import uuid4

import pytest

from src.common.forms import FormValidationError
from src.transport.dtos import TransportOptionDTO
from src.transport.mappers import TransportForm, transport_to_form


def test_transport_form():
    record = TransportForm(
        method_name="Shuttle bus",
        pickup_locations="Hotel A, Station,, Hotel B",
        max_capacity="40",
        booking_required=True,
    ).to_record()

    assert record["pickup_locations"] == ["Hotel A", "Station", "Hotel B"]
    assert record["max_capacity"] == 40
    assert record["booking_phone"] is None


def test_empty_capacity_is_unlimited():
    record = TransportForm(method_name="Taxi").to_record()

    assert record["max_capacity"] is None


@pytest.mark.parametrize("max_capacity", ["forty", "-1", "2.5"])
def test_bad_capacity(max_capacity):
    with pytest.raises(FormValidationError) as exc_info:
        TransportForm(method_name="Bus", max_capacity=max_capacity).to_record()

    assert exc_info.value.field == "max_capacity"


def test_remaining_capacity():
    unlimited = TransportOptionDTO(id=uuid4(), method_name="Taxi")
    overbooked = TransportOptionDTO(
        id=uuid4(), method_name="Bus", max_capacity=10, current_bookings=12
    )

    assert unlimited.remaining_capacity is None
    assert overbooked.remaining_capacity == 0
    assert transport_to_form(overbooked).max_capacity == "10"
    assert transport_to_form(unlimited).max_capacity == ""

from uuid import uuid4

import pytest

from src.accommodation.dtos import AccommodationOptionDTO
from src.accommodation.mappers import AccommodationForm, accommodation_to_form
from src.common.forms import FormValidationError


def test_amenities_and_coordinates_are_parsed():
    record = AccommodationForm(
        name=" Grand Hotel ",
        amenities="Pool, WiFi ,  Parking",
        coordinates="-0.1276, 51.5072",
        website_url="",
    ).to_record()

    assert record["name"] == "Grand Hotel"
    assert record["amenities"] == ["Pool", "WiFi", "Parking"]
    assert record["coordinates"] == [-0.1276, 51.5072]
    assert record["website_url"] is None
    assert record["category_id"] is None


def test_empty_coordinates_mean_none():
    record = AccommodationForm(name="Inn", coordinates="").to_record()

    assert record["coordinates"] is None
    assert record["amenities"] == []


@pytest.mark.parametrize("coordinates", ["51.5", "a,b", "1,2,3"])
def test_bad_coordinates_are_rejected(coordinates):
    with pytest.raises(FormValidationError) as exc_info:
        AccommodationForm(name="Inn", coordinates=coordinates).to_record()

    assert exc_info.value.field == "coordinates"


def test_name_is_required():
    with pytest.raises(FormValidationError) as exc_info:
        AccommodationForm(name="").to_record()

    assert exc_info.value.message == "Name is required"


def test_option_to_form():
    option = AccommodationOptionDTO(
        id=uuid4(),
        name="Inn",
        amenities=["Bar", "Garden"],
        coordinates=[2.35, 48.85],
    )

    form = accommodation_to_form(option)

    assert form.amenities == "Bar, Garden"
    assert form.coordinates == "2.35,48.85"
    assert form.phone == ""

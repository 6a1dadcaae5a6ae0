from uuid import uuid4

import pytest

from src.common.forms import FormValidationError, ValueType
from src.feature_flags.dtos import FeatureFlagDTO
from src.feature_flags.mappers import FeatureFlagForm, flag_to_form


def test_to_record_parses_every_field():
    form = FeatureFlagForm(
        flag_key=" seating_chart ",
        flag_name="Seating chart",
        rollout_percentage=25,
        flag_type=ValueType.NUMBER,
        default_value="3",
        target_users="alice, bob ,,",
        excluded_users="",
        conditions='{"role": "admin"}',
    )

    record = form.to_record()

    assert record["flag_key"] == "seating_chart"
    assert record["default_value"] == 3
    assert record["target_users"] == ["alice", "bob"]
    assert record["excluded_users"] == []
    assert record["conditions"] == {"role": "admin"}
    assert record["description"] is None


def test_number_default_must_parse():
    form = FeatureFlagForm(
        flag_key="k", flag_name="n", flag_type=ValueType.NUMBER, default_value="abc"
    )

    with pytest.raises(FormValidationError) as exc_info:
        form.to_record()
    assert exc_info.value.field == "default_value"


@pytest.mark.parametrize("conditions", ["{not json", "[1, 2]"])
def test_conditions_must_be_a_json_object(conditions):
    form = FeatureFlagForm(flag_key="k", flag_name="n", conditions=conditions)

    with pytest.raises(FormValidationError) as exc_info:
        form.to_record()
    assert exc_info.value.message == "Invalid JSON in conditions field"


def test_rollout_out_of_range_is_rejected():
    form = FeatureFlagForm(flag_key="k", flag_name="n", rollout_percentage=101)

    with pytest.raises(FormValidationError) as exc_info:
        form.to_record()
    assert exc_info.value.field == "rollout_percentage"


def test_missing_key_is_rejected():
    with pytest.raises(FormValidationError) as exc_info:
        FeatureFlagForm(flag_name="n").to_record()
    assert exc_info.value.field == "flag_key"


def test_flag_to_form_prefills_text_fields():
    flag = FeatureFlagDTO(
        id=uuid4(),
        flag_key="menu",
        flag_name="Menu",
        flag_type=ValueType.JSON,
        default_value={"courses": 3},
        target_users=["alice", "bob"],
        conditions={"role": "admin"},
    )

    form = flag_to_form(flag)

    assert form.target_users == "alice, bob"
    assert form.default_value == '{\n  "courses": 3\n}'
    assert form.to_record()["conditions"] == {"role": "admin"}

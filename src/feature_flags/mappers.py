import json
from typing import Any

from pydantic import BaseModel

from src.common.forms import (
    FormValidationError,
    ValueType,
    blank_to_none,
    format_typed_value,
    join_csv_field,
    parse_typed_value,
    require,
    split_csv_field,
)
from src.feature_flags.dtos import FeatureFlagDTO


class FeatureFlagForm(BaseModel):
    flag_key: str = ""
    flag_name: str = ""
    description: str = ""
    is_enabled: bool = False
    rollout_percentage: int = 0
    flag_type: ValueType = ValueType.BOOLEAN
    default_value: str = "false"
    # comma-separated user ids
    target_users: str = ""
    excluded_users: str = ""
    # JSON object text
    conditions: str = "{}"

    def to_record(self) -> dict[str, Any]:
        require("flag_key", self.flag_key, "Flag key is required")
        require("flag_name", self.flag_name, "Flag name is required")
        if not 0 <= self.rollout_percentage <= 100:
            raise FormValidationError(
                "rollout_percentage", "Rollout percentage must be between 0 and 100"
            )

        return {
            "flag_key": self.flag_key.strip(),
            "flag_name": self.flag_name.strip(),
            "description": blank_to_none(self.description),
            "is_enabled": self.is_enabled,
            "rollout_percentage": self.rollout_percentage,
            "flag_type": self.flag_type,
            "default_value": parse_typed_value(self.flag_type, self.default_value),
            "target_users": split_csv_field(self.target_users),
            "excluded_users": split_csv_field(self.excluded_users),
            "conditions": self._parse_conditions(),
        }

    def _parse_conditions(self) -> dict[str, Any]:
        if not self.conditions.strip():
            return {}
        try:
            conditions = json.loads(self.conditions)
        except json.JSONDecodeError as e:
            raise FormValidationError("conditions", "Invalid JSON in conditions field") from e
        if not isinstance(conditions, dict):
            raise FormValidationError("conditions", "Invalid JSON in conditions field")
        return conditions


def flag_to_form(flag: FeatureFlagDTO) -> FeatureFlagForm:
    return FeatureFlagForm(
        flag_key=flag.flag_key,
        flag_name=flag.flag_name,
        description=flag.description,
        is_enabled=flag.is_enabled,
        rollout_percentage=flag.rollout_percentage,
        flag_type=flag.flag_type,
        default_value=format_typed_value(flag.default_value),
        target_users=join_csv_field(flag.target_users),
        excluded_users=join_csv_field(flag.excluded_users),
        conditions=json.dumps(flag.conditions, indent=2),
    )

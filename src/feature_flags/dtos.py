from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from src.common.forms import ValueType


class FlagNotFoundError(Exception):
    def __init__(self, flag_key: str) -> None:
        self.flag_key = flag_key
        super().__init__(f"Feature flag '{flag_key}' not found")


@dataclass(frozen=True)
class FeatureFlagDTO:
    id: UUID
    flag_key: str
    flag_name: str
    description: str = ""
    is_enabled: bool = False
    rollout_percentage: int = 0
    flag_type: ValueType = ValueType.BOOLEAN
    default_value: Any = None
    target_users: list[str] = field(default_factory=list)
    excluded_users: list[str] = field(default_factory=list)
    conditions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "FeatureFlagDTO":
        return cls(
            id=row["id"],
            flag_key=row["flag_key"],
            flag_name=row["flag_name"],
            description=row.get("description") or "",
            is_enabled=bool(row.get("is_enabled")),
            rollout_percentage=row.get("rollout_percentage") or 0,
            flag_type=ValueType(row.get("flag_type") or ValueType.BOOLEAN),
            default_value=row.get("default_value"),
            target_users=list(row.get("target_users") or []),
            excluded_users=list(row.get("excluded_users") or []),
            conditions=dict(row.get("conditions") or {}),
        )

from typing import Any

from sqlalchemy import JSON, Boolean, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.common.forms import ValueType
from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp, enum_values


class FeatureFlag(Base, TimeStamp):
    __tablename__ = TableNames.FEATURE_FLAGS.value

    flag_key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    flag_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rollout_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    flag_type: Mapped[str] = mapped_column(
        Enum(ValueType, name="flag_type_enum", values_callable=enum_values),
        default=ValueType.BOOLEAN,
        nullable=False,
    )
    default_value: Mapped[Any] = mapped_column(JSON, nullable=True)
    target_users: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    excluded_users: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    conditions: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    def __repr__(self) -> str:
        return f"<FeatureFlag {self.flag_key} enabled={self.is_enabled}>"

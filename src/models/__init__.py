from .base import Base, BaseModel, TimeStamp, enum_values, utcnow

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
    "enum_values",
    "utcnow",
]

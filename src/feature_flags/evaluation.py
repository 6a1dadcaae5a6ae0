import hashlib
from collections.abc import Mapping
from typing import Any

from src.feature_flags.dtos import FeatureFlagDTO

ANONYMOUS = "anonymous"


def rollout_bucket(flag_key: str, user_id: str | None) -> int:
    """Stable bucket in [0, 100) for a user and flag."""
    digest = hashlib.sha256(f"{flag_key}:{user_id or ANONYMOUS}".encode()).hexdigest()
    return int(digest, 16) % 100


def conditions_match(conditions: Mapping[str, Any], context: Mapping[str, Any] | None) -> bool:
    """Every condition must equal the context value of the same key. No context matches."""
    if not context:
        return True
    return all(context.get(key) == expected for key, expected in conditions.items())


def is_flag_enabled(
    flag: FeatureFlagDTO,
    user_id: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> bool:
    if not flag.is_enabled:
        return False
    if user_id is not None:
        if user_id in flag.excluded_users:
            return False
        if user_id in flag.target_users:
            return True
    if rollout_bucket(flag.flag_key, user_id) >= flag.rollout_percentage:
        return False
    return conditions_match(flag.conditions, context)

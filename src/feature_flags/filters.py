from collections.abc import Iterable

from src.common.filtering import ALL, filter_records, matches_category, matches_text
from src.feature_flags.dtos import FeatureFlagDTO

ENABLED = "enabled"
DISABLED = "disabled"


def flag_status(flag: FeatureFlagDTO) -> str:
    return ENABLED if flag.is_enabled else DISABLED


def filter_flags(
    flags: Iterable[FeatureFlagDTO],
    query: str | None = None,
    flag_type: str | None = ALL,
    status: str | None = ALL,
) -> list[FeatureFlagDTO]:
    return filter_records(
        flags,
        lambda f: matches_text(query, f.flag_name, f.flag_key, f.description),
        lambda f: matches_category(flag_type, f.flag_type.value),
        lambda f: matches_category(status, flag_status(f)),
    )

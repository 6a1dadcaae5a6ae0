from src.common.filtering import ALL, filter_records, matches_category, matches_text


def test_matches_text():
    assert matches_text("", "anything")
    assert matches_text(None)
    assert matches_text("SMI", None, "Jane Smith")
    assert not matches_text("x", None, "")


def test_matches_category():
    assert matches_category(ALL, "friend")
    assert matches_category(None, "friend")
    assert matches_category("friend", "friend")
    assert not matches_category("family", "friend")


def test_filter_records_requires_every_predicate():
    records = [1, 2, 3, 4, 5, 6]

    result = filter_records(records, lambda r: r % 2 == 0, lambda r: r > 2)

    assert result == [4, 6]
    assert filter_records(records) == records
    assert filter_records(records) is not records

import pytest

from salesdesk.services.customer_directory import (
    CustomerFilters,
    build_pagination,
    normalize_window,
    parse_bool,
    parse_int,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("25", 25),
        (" 7 ", 7),
        ("20abc", 20),
        ("-3", -3),
        ("abc", 50),
        ("", 50),
        (None, 50),
        (12, 12),
    ],
)
def test_parse_int_reads_leading_integer(raw, expected):
    assert parse_int(raw, 50) == expected


def test_normalize_window_clamps_bad_values():
    assert normalize_window("10", "20") == (10, 20)
    assert normalize_window("0", "5") == (50, 5)
    assert normalize_window("-10", "-5") == (50, 0)
    assert normalize_window(None, None) == (50, 0)


def test_build_pagination():
    p = build_pagination(limit=10, offset=25, total=31)
    assert (p.page, p.limit, p.total, p.pages) == (3, 10, 31, 4)

    empty = build_pagination(limit=50, offset=0, total=0)
    assert (empty.page, empty.pages) == (1, 0)


def test_parse_bool():
    assert parse_bool("TRUE") is True
    assert parse_bool("1") is True
    assert parse_bool("no") is False
    assert parse_bool("sometimes") is None
    assert parse_bool(None) is None


def test_legacy_search_only_for_name_or_email():
    assert CustomerFilters(name="acme").uses_legacy_search
    assert CustomerFilters(email="a@example.com").uses_legacy_search
    assert not CustomerFilters(search="acme").uses_legacy_search
    assert not CustomerFilters(name="").uses_legacy_search

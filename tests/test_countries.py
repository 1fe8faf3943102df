import pytest

from goodnews.core.countries import COUNTRY_NAMES, normalize_country, resolve


@pytest.mark.parametrize("code, name", [("us", "United States"), ("BG", "Bulgaria"), (" kr ", "South Korea")])
def test_known_codes_resolve(code, name):
    assert resolve(code) == name


def test_unknown_code_is_returned_unchanged():
    assert resolve("xx") == "xx"
    assert resolve("ZZ") == "ZZ"


def test_table_has_fifteen_countries():
    assert len(COUNTRY_NAMES) == 15


@pytest.mark.parametrize("raw, expected", [("", "us"), (None, "us"), ("  ", "us"), ("GB", "gb"), (" de ", "de")])
def test_normalize_country(raw, expected):
    assert normalize_country(raw) == expected

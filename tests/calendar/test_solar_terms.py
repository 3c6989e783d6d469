"""
Tests for the 24 solar terms.
"""

from __future__ import annotations

from datetime import date

import pytest

from harmony.calendar.solar_terms import (
    SOLAR_TERMS,
    normalize_term_name,
    solar_terms_between,
    solar_terms_of_year,
)
from harmony.core.exceptions import UnsupportedDateRange


class TestNormalizeTermName:
    """Raw name normalization."""

    @pytest.mark.parametrize("raw", ["立春", "LICHUN", "Lichun", "lichun", "LI_CHUN", " li_chun "])
    def test_lichun_variants(self, raw):
        assert normalize_term_name(raw) == "입춘"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("驚蟄", "경칩"),
            ("惊蛰", "경칩"),
            ("淸明", "청명"),
            ("清明", "청명"),
            ("穀雨", "곡우"),
            ("谷雨", "곡우"),
            ("處暑", "처서"),
            ("处暑", "처서"),
            ("DONG_ZHI", "동지"),
            ("Shuangjiang", "상강"),
            ("XIAO_HAN", "소한"),
            ("DA_XUE", "대설"),
        ],
    )
    def test_known_names(self, raw, expected):
        assert normalize_term_name(raw) == expected

    def test_korean_name_is_stable(self):
        for name in SOLAR_TERMS:
            assert normalize_term_name(name) == name

    def test_unknown_name_returned_unchanged(self):
        assert normalize_term_name("NOT_A_TERM") == "NOT_A_TERM"
        assert normalize_term_name("") == ""


class TestSolarTermsOfYear:
    """Per-year solar term map."""

    def test_exactly_24_terms(self):
        terms = solar_terms_of_year(2024)
        assert len(terms) == 24
        assert sorted(terms.values()) == sorted(SOLAR_TERMS)
        assert all(key.startswith("2024-") for key in terms)

    def test_terms_in_calendar_order(self):
        assert tuple(solar_terms_of_year(2024).values()) == SOLAR_TERMS

    def test_known_dates_2024(self):
        terms = solar_terms_of_year(2024)
        assert terms["2024-02-04"] == "입춘"
        assert terms["2024-03-20"] == "춘분"
        assert terms["2024-06-21"] == "하지"
        assert terms["2024-12-21"] == "동지"

    @pytest.mark.parametrize("year", [1950, 1988, 2000, 2031, 2049])
    def test_every_year_has_all_terms(self, year):
        terms = solar_terms_of_year(year)
        assert sorted(terms.values()) == sorted(SOLAR_TERMS)

    def test_unsupported_year(self):
        with pytest.raises(UnsupportedDateRange):
            solar_terms_of_year(2051)


class TestSolarTermsBetween:
    def test_range_across_year_boundary(self):
        terms = solar_terms_between(date(2023, 12, 1), date(2024, 2, 29))
        assert list(terms.values()) == ["대설", "동지", "소한", "대한", "입춘", "우수"]
        assert "2024-02-04" in terms

    def test_empty_when_reversed(self):
        assert solar_terms_between(date(2024, 3, 1), date(2024, 2, 1)) == {}

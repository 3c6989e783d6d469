"""
Tests for memo recurrence matching.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

import pytest

from harmony.calendar.lunar import lunar_date, to_lunar
from harmony.calendar.models import Memo, RepeatType
from harmony.calendar.recurrence import filter_active, is_active


def make_memo(anchor: str, repeat: RepeatType | str = RepeatType.NONE, memo_id: str = "m1") -> Memo:
    return Memo(id=memo_id, date=anchor, content="memo", repeat_type=repeat)


class TestNoRepeat:
    def test_active_on_anchor_only(self):
        memo = make_memo("2024-03-05")
        assert is_active(memo, date(2024, 3, 5))
        assert not is_active(memo, date(2024, 3, 6))
        assert not is_active(memo, date(2025, 3, 5))

    def test_datetime_target(self):
        memo = make_memo("2024-03-05")
        assert is_active(memo, datetime(2024, 3, 5, 23, 59))

    def test_empty_repeat_type_behaves_like_none(self):
        memo = make_memo("2024-03-05", repeat="")
        assert is_active(memo, date(2024, 3, 5))
        assert not is_active(memo, date(2024, 3, 12))


class TestNeverBackwards:
    @pytest.mark.parametrize(
        "repeat",
        [RepeatType.WEEKLY, RepeatType.MONTHLY, RepeatType.YEARLY_SOLAR, RepeatType.YEARLY_LUNAR],
    )
    def test_no_match_before_anchor(self, repeat):
        memo = make_memo("2024-03-05", repeat)
        for days in (1, 7, 28, 365, 384):
            assert not is_active(memo, date(2024, 3, 5) - timedelta(days=days))

    @pytest.mark.parametrize(
        "repeat",
        [RepeatType.WEEKLY, RepeatType.MONTHLY, RepeatType.YEARLY_SOLAR, RepeatType.YEARLY_LUNAR],
    )
    def test_matches_on_anchor(self, repeat):
        memo = make_memo("2024-03-05", repeat)
        assert is_active(memo, date(2024, 3, 5))


class TestWeekly:
    def test_wednesday_for_ten_weeks(self):
        """2024-01-03 is a Wednesday."""
        anchor = date(2024, 1, 3)
        memo = make_memo(anchor.isoformat(), RepeatType.WEEKLY)
        for offset in range(70):
            target = anchor + timedelta(days=offset)
            assert is_active(memo, target) == (target.weekday() == 2)


class TestMonthly:
    def test_31st_never_matches_short_months(self):
        memo = make_memo("2023-01-31", RepeatType.MONTHLY)
        assert not is_active(memo, date(2023, 2, 28))
        assert is_active(memo, date(2023, 3, 31))
        assert not is_active(memo, date(2023, 4, 30))
        assert is_active(memo, date(2023, 5, 31))

    def test_same_day_of_month(self):
        memo = make_memo("2024-01-15", RepeatType.MONTHLY)
        assert is_active(memo, date(2024, 2, 15))
        assert is_active(memo, date(2025, 7, 15))
        assert not is_active(memo, date(2024, 2, 16))


class TestYearlySolar:
    def test_same_month_and_day(self):
        memo = make_memo("2020-06-10", RepeatType.YEARLY_SOLAR)
        assert is_active(memo, date(2024, 6, 10))
        assert not is_active(memo, date(2024, 7, 10))
        assert not is_active(memo, date(2024, 6, 11))

    def test_leap_day_only_in_leap_years(self):
        memo = make_memo("2024-02-29", RepeatType.YEARLY_SOLAR)
        assert not is_active(memo, date(2025, 2, 28))
        assert is_active(memo, date(2028, 2, 29))


class TestYearlyLunar:
    def test_chuseok_across_years(self):
        """Anchored on Chuseok 2023, matches every later Chuseok."""
        memo = make_memo("2023-09-29", RepeatType.YEARLY_LUNAR)
        for year in range(2024, 2031):
            chuseok = lunar_date(year, 8, 15)
            assert is_active(memo, chuseok)
            assert not is_active(memo, chuseok + timedelta(days=1))
            assert not is_active(memo, chuseok - timedelta(days=1))

    def test_known_gregorian_dates(self):
        memo = make_memo("2023-09-29", RepeatType.YEARLY_LUNAR)
        assert is_active(memo, date(2024, 9, 17))
        assert is_active(memo, date(2025, 10, 6))
        assert not is_active(memo, date(2024, 9, 29))

    def test_leap_month_flag_ignored(self):
        """A memo on leap 2/1 of 2023 matches regular 2/1 of 2024."""
        anchor = lunar_date(2023, 2, 1, is_leap_month=True)
        assert to_lunar(anchor).is_leap_month

        memo = make_memo(anchor.isoformat(), RepeatType.YEARLY_LUNAR)
        assert is_active(memo, lunar_date(2024, 2, 1))


class TestUnknownRule:
    def test_unknown_rule_is_inactive(self, caplog):
        memo = make_memo("2024-03-05", repeat="daily")
        with caplog.at_level(logging.WARNING):
            assert not is_active(memo, date(2024, 3, 6))
            assert not is_active(memo, date(2024, 3, 5))
        assert "daily" in caplog.text


class TestFilterActive:
    def test_preserves_order_without_dedup(self):
        memos = [
            make_memo("2024-03-05", RepeatType.WEEKLY, "newest"),
            make_memo("2024-03-12", RepeatType.NONE, "one-off"),
            make_memo("2024-03-05", RepeatType.WEEKLY, "oldest"),
        ]
        active = filter_active(memos, date(2024, 3, 12))
        assert [m.id for m in active] == ["newest", "one-off", "oldest"]

    def test_empty(self):
        assert filter_active([], date(2024, 3, 12)) == []


class TestOutOfRangeAnchor:
    def test_lunar_anchor_before_tables_is_inactive(self, caplog):
        memo = make_memo("0999-12-01", RepeatType.YEARLY_LUNAR)
        with caplog.at_level(logging.WARNING):
            assert not is_active(memo, date(2024, 2, 10))
        assert "out of range" in caplog.text

    def test_solar_rules_unaffected(self):
        memo = make_memo("0999-12-01", RepeatType.YEARLY_SOLAR)
        assert is_active(memo, date(2024, 12, 1))

"""
Biorhythm 테스트
"""

from datetime import date, datetime

import pytest

from harmony.biorhythm import Biorhythm, biorhythm, biorhythm_series


class TestBiorhythm:
    def test_birth_day_is_zero(self):
        result = biorhythm(date(1990, 5, 17), date(1990, 5, 17))
        assert (result.physical, result.emotional, result.intellectual) == (0, 0, 0)

    def test_emotional_quarter_cycles(self):
        """감성 주기 28일: 7일째 최고, 21일째 최저"""
        birth = date(2024, 1, 1)
        assert biorhythm(birth, date(2024, 1, 8)).emotional == 100
        assert biorhythm(birth, date(2024, 1, 15)).emotional == 0
        assert biorhythm(birth, date(2024, 1, 22)).emotional == -100

    def test_full_periods_return_to_zero(self):
        birth = date(2024, 1, 1)
        assert biorhythm(birth, date(2024, 1, 24)).physical == 0
        assert biorhythm(birth, date(2024, 2, 3)).intellectual == 0

    def test_values_in_range(self):
        birth = date(1985, 11, 30)
        for offset in range(0, 400, 13):
            result = biorhythm(birth, date.fromordinal(date(2024, 1, 1).toordinal() + offset))
            for value in (result.physical, result.emotional, result.intellectual):
                assert -100 <= value <= 100

    def test_accepts_strings_and_datetimes(self):
        expected = biorhythm(date(1990, 5, 17), date(2024, 3, 5))
        assert biorhythm("1990-05-17", datetime(2024, 3, 5, 18, 0)) == expected

    def test_target_before_birth(self):
        with pytest.raises(ValueError):
            biorhythm(date(2024, 3, 5), date(2024, 3, 4))

    def test_to_dict(self):
        result = Biorhythm(date(2024, 3, 5), 10, -20, 30)
        assert result.to_dict() == {
            "date": "2024-03-05",
            "physical": 10,
            "emotional": -20,
            "intellectual": 30,
        }


class TestBiorhythmSeries:
    def test_span_around_center(self):
        series = biorhythm_series(date(1990, 5, 17), date(2024, 3, 5), span=3)
        assert [r.date for r in series] == [
            date(2024, 3, 2), date(2024, 3, 3), date(2024, 3, 4), date(2024, 3, 5),
            date(2024, 3, 6), date(2024, 3, 7), date(2024, 3, 8),
        ]

    def test_skips_days_before_birth(self):
        series = biorhythm_series(date(2024, 3, 5), date(2024, 3, 6), span=3)
        assert series[0].date == date(2024, 3, 5)
        assert len(series) == 5

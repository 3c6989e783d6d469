"""
Biorhythm - 바이오리듬 계산

출생일로부터 지난 일수에 대한 사인 함수로 신체(23일), 감성(28일), 지성(33일)
지수를 -100 ~ 100 범위의 정수로 계산합니다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from harmony.calendar.models import as_date

PHYSICAL_PERIOD = 23
EMOTIONAL_PERIOD = 28
INTELLECTUAL_PERIOD = 33


@dataclass(frozen=True)
class Biorhythm:
    """하루의 바이오리듬 지수"""
    date: date
    physical: int
    emotional: int
    intellectual: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "physical": self.physical,
            "emotional": self.emotional,
            "intellectual": self.intellectual,
        }


def _index(days: int, period: int) -> int:
    return round(math.sin(2 * math.pi * days / period) * 100)


def biorhythm(birth_date: date | datetime | str, target: date | datetime | str) -> Biorhythm:
    """
    target 날짜의 바이오리듬

    Raises:
        ValueError: target이 출생일보다 이전인 경우
    """
    birth = as_date(birth_date)
    day = as_date(target)
    days = (day - birth).days
    if days < 0:
        raise ValueError(f"Target date {day} is before birth date {birth}")

    return Biorhythm(
        date=day,
        physical=_index(days, PHYSICAL_PERIOD),
        emotional=_index(days, EMOTIONAL_PERIOD),
        intellectual=_index(days, INTELLECTUAL_PERIOD),
    )


def biorhythm_series(
    birth_date: date | datetime | str,
    center: date | datetime | str,
    span: int = 7,
) -> list[Biorhythm]:
    """center 전후 span일의 바이오리듬 (출생일 이전 날짜는 제외)"""
    birth = as_date(birth_date)
    middle = as_date(center)
    days = (middle + timedelta(days=offset) for offset in range(-span, span + 1))
    return [biorhythm(birth, d) for d in days if d >= birth]

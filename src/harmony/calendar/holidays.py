"""
Korean public holidays - 공휴일 계산

양력 고정 공휴일, 음력 공휴일(설날/추석/부처님오신날)과
대체공휴일을 연도별 {ISO 날짜: 공휴일명} 맵으로 계산합니다.

Rules:
- 고정 공휴일 중 신정, 현충일을 제외한 6개는 토/일요일이면 다음 월요일이 대체공휴일
- 설날/추석 연휴(전날, 당일, 다음날)는 일요일과 겹칠 때만 연휴 다음날이 대체공휴일
- 부처님오신날은 토/일요일이면 다음 월요일이 대체공휴일

Collision policy:
- 같은 날짜에 공휴일이 겹치면 고정 공휴일 이름이 우선
- 대체공휴일은 모든 본 공휴일 등록 후 배정하며, 이미 공휴일인 날짜를 덮어쓰지 않고
  다음 빈 평일로 밀립니다
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from harmony.calendar.lunar import lunar_date
from harmony.calendar.models import as_date

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6

# 고정 공휴일 (양력)
FIXED_HOLIDAYS: dict[tuple[int, int], str] = {
    (1, 1): "신정",
    (3, 1): "삼일절",
    (5, 5): "어린이날",
    (6, 6): "현충일",
    (8, 15): "광복절",
    (10, 3): "개천절",
    (10, 9): "한글날",
    (12, 25): "성탄절",
}

# 대체공휴일 미적용 (신정, 현충일)
NO_SUBSTITUTE = frozenset({"신정", "현충일"})

SEOLLAL = "설날"
SEOLLAL_HOLIDAY = "설날 연휴"
CHUSEOK = "추석"
CHUSEOK_HOLIDAY = "추석 연휴"
BUDDHAS_BIRTHDAY = "부처님오신날"


def substitute_label(name: str) -> str:
    """대체공휴일 표기"""
    return f"대체공휴일({name})"


def _following_monday(d: date) -> date:
    """토요일 -> +2일, 일요일 -> +1일"""
    return d + timedelta(days=7 - d.weekday())


def _is_weekend(d: date) -> bool:
    return d.weekday() in (SATURDAY, SUNDAY)


def _lunar_window(center: date) -> list[date]:
    """음력 명절 3일 연휴 (전날, 당일, 다음날)"""
    return [center - timedelta(days=1), center, center + timedelta(days=1)]


def holidays_of_year(year: int) -> dict[str, str]:
    """
    연도의 공휴일 맵 계산

    Args:
        year: 양력 연도

    Returns:
        {"YYYY-MM-DD": 공휴일명} (날짜순)

    Raises:
        UnsupportedDateRange: 음력 변환 범위 밖의 연도

    Examples:
        >>> holidays_of_year(2024)["2024-02-10"]
        '설날 연휴'
    """
    primary: dict[date, str] = {}
    # (명목상 대체일, 원 공휴일명) - 등록 순서대로 배정
    pending: list[tuple[date, str]] = []

    # 1. 양력 고정 공휴일
    for (month, day), name in FIXED_HOLIDAYS.items():
        d = date(year, month, day)
        primary[d] = name
        if name not in NO_SUBSTITUTE and _is_weekend(d):
            pending.append((_following_monday(d), name))

    # 2. 설날, 추석 연휴 - 일요일과 겹칠 때만 대체
    for month, day, name, label in (
        (1, 1, SEOLLAL, SEOLLAL_HOLIDAY),
        (8, 15, CHUSEOK, CHUSEOK_HOLIDAY),
    ):
        window = _lunar_window(lunar_date(year, month, day))
        for d in window:
            primary.setdefault(d, label)
        if any(d.weekday() == SUNDAY for d in window):
            pending.append((window[-1] + timedelta(days=1), name))

    # 3. 부처님오신날
    buddha = lunar_date(year, 4, 8)
    primary.setdefault(buddha, BUDDHAS_BIRTHDAY)
    if _is_weekend(buddha):
        pending.append((_following_monday(buddha), BUDDHAS_BIRTHDAY))

    # 4. 대체공휴일 배정
    holidays = dict(primary)
    for nominal, name in pending:
        d = nominal
        while d in holidays or _is_weekend(d):
            d += timedelta(days=1)
        if d != nominal:
            logger.debug("Substitute for %s moved from %s to %s", name, nominal, d)
        holidays[d] = substitute_label(name)

    logger.debug("Computed %d holidays for %d", len(holidays), year)
    return {d.isoformat(): holidays[d] for d in sorted(holidays)}


def holiday_name(value: date | str) -> str | None:
    """날짜의 공휴일명 (없으면 None)"""
    d = as_date(value)
    return holidays_of_year(d.year).get(d.isoformat())


def is_holiday(value: date | str) -> bool:
    """공휴일 여부"""
    return holiday_name(value) is not None

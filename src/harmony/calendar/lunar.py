"""
Lunar Calendar Converter - 음력/양력 변환 모듈

korean-lunar-calendar 라이브러리로 음력/양력을 변환하고,
lunar-python 라이브러리로 음력 연도별 24절기 표를 구합니다.

Usage:
    from harmony.calendar.lunar import lunar_date, to_lunar

    # 2024년 설날 (음력 1월 1일) -> 양력
    lunar_date(2024, 1, 1)
    # 결과: date(2024, 2, 10)
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from korean_lunar_calendar import KoreanLunarCalendar
from lunar_python import Lunar

from harmony.calendar.models import LunarDate, as_date
from harmony.core.exceptions import UnsupportedDateRange

logger = logging.getLogger(__name__)

# korean-lunar-calendar 변환표 범위
MIN_SOLAR_DATE = date(1000, 2, 13)
MAX_SOLAR_DATE = date(2050, 12, 31)
MIN_LUNAR = (1000, 1, 1)
MAX_LUNAR = (2050, 11, 18)
MIN_YEAR = MIN_LUNAR[0]
MAX_YEAR = MAX_LUNAR[0]

# lunar-python 절기 시각은 UTC+8 기준
KST_OFFSET = timedelta(hours=1)


def _check_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise UnsupportedDateRange(year, details={"min_year": MIN_YEAR, "max_year": MAX_YEAR})


def to_lunar(value: date | datetime | str) -> LunarDate:
    """
    양력 날짜를 음력 날짜로 변환

    Args:
        value: 양력 날짜 (datetime은 날짜로 고정)

    Returns:
        LunarDate

    Raises:
        UnsupportedDateRange: 변환표 범위 밖의 날짜

    Examples:
        >>> to_lunar(date(2024, 2, 10))
        LunarDate(year=2024, month=1, day=1, is_leap_month=False)
    """
    d = as_date(value)
    if not MIN_SOLAR_DATE <= d <= MAX_SOLAR_DATE:
        raise UnsupportedDateRange(d.isoformat())

    calendar = KoreanLunarCalendar()
    if not calendar.setSolarDate(d.year, d.month, d.day):
        raise UnsupportedDateRange(d.isoformat())

    return LunarDate(
        year=calendar.lunarYear,
        month=calendar.lunarMonth,
        day=calendar.lunarDay,
        is_leap_month=bool(calendar.isIntercalation),
    )


def lunar_date(year: int, month: int, day: int, is_leap_month: bool = False) -> date:
    """
    음력 날짜를 양력 날짜로 변환

    Args:
        year: 음력 연도
        month: 음력 월 (1-12)
        day: 음력 일 (1-30)
        is_leap_month: 윤달 여부

    Returns:
        양력 date

    Raises:
        UnsupportedDateRange: 범위 밖이거나 존재하지 않는 음력 날짜

    Examples:
        >>> lunar_date(2024, 8, 15)  # 2024년 추석
        datetime.date(2024, 9, 17)
    """
    if not MIN_LUNAR <= (year, month, day) <= MAX_LUNAR:
        raise UnsupportedDateRange(f"lunar {year}-{month:02d}-{day:02d}")

    calendar = KoreanLunarCalendar()
    if not calendar.setLunarDate(year, month, day, is_leap_month):
        raise UnsupportedDateRange(
            f"lunar {year}-{month:02d}-{day:02d}",
            details={"is_leap_month": is_leap_month},
        )

    return date(calendar.solarYear, calendar.solarMonth, calendar.solarDay)


def lunar_new_year(year: int) -> date:
    """해당 연도 설날(음력 1월 1일)의 양력 날짜"""
    return lunar_date(year, 1, 1)


def solar_terms_table(year: int) -> dict[date, str]:
    """
    음력 연도의 절기표 (양력 날짜 -> 원본 절기명)

    lunar-python 절기표는 전년 12월(대설)부터 다음 해 3월(경칩)까지를 포함하며,
    이름은 간체 한자 또는 DONG_ZHI 같은 대문자 토큰입니다.
    날짜는 한국 표준시로 환산한 날짜입니다.

    Raises:
        UnsupportedDateRange: 지원 범위 밖의 연도
    """
    _check_year(year)

    table: dict[date, str] = {}
    for name, solar in Lunar.fromYmd(year, 1, 1).getJieQiTable().items():
        if solar is None:
            continue
        instant = datetime(
            solar.getYear(),
            solar.getMonth(),
            solar.getDay(),
            solar.getHour(),
            solar.getMinute(),
            solar.getSecond(),
        )
        table[(instant + KST_OFFSET).date()] = name

    logger.debug("Solar term table for lunar year %d: %d entries", year, len(table))
    return table

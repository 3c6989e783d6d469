"""
Calendar day annotator - 달력 칸 주석

음력 변환, 공휴일/절기 맵, 메모 반복 판정을 묶어 달력 한 칸마다 DayAnnotation을 만듭니다.
공휴일/절기 맵은 양력 연도 단위로 캐시하며, 부분 수정 없이 연도 전체를 다시 계산합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from harmony.calendar.holidays import holidays_of_year
from harmony.calendar.lunar import to_lunar
from harmony.calendar.models import DayAnnotation, Memo, RepeatType, as_date
from harmony.calendar.recurrence import filter_active, is_active
from harmony.calendar.solar_terms import solar_terms_of_year
from harmony.core.exceptions import UnsupportedDateRange

logger = logging.getLogger(__name__)

GRID_DAYS = 42


@dataclass(frozen=True)
class AnnotationContext:
    """연도 단위 조회 맵과 메모 전체 (저장 순서)"""

    holidays: dict[str, str] = field(default_factory=dict)
    solar_terms: dict[str, str] = field(default_factory=dict)
    memos: Sequence[Memo] = ()


def annotate(value: date | datetime | str, context: AnnotationContext) -> DayAnnotation:
    """
    날짜 하나의 주석 묶음 생성

    Raises:
        UnsupportedDateRange: 음력 변환 범위 밖의 날짜
    """
    d = as_date(value)
    key = d.isoformat()
    return DayAnnotation(
        date=d,
        lunar=to_lunar(d),
        holiday=context.holidays.get(key),
        solar_term=context.solar_terms.get(key),
        memos=filter_active(context.memos, d),
    )


def _placeholder(d: date, memos: Iterable[Memo]) -> DayAnnotation:
    """음력 변환이 불가능한 날짜의 대체 주석 (양력 기준 메모만)"""
    solar_only = [
        memo
        for memo in memos
        if memo.repeat_type is not RepeatType.YEARLY_LUNAR and is_active(memo, d)
    ]
    return DayAnnotation(date=d, memos=solar_only)


class YearCache:
    """
    연도 -> (공휴일 맵, 절기 맵) 캐시

    Usage:
        cache = YearCache()
        context = cache.context_for(month_grid(2024, 2), memos)
    """

    def __init__(self):
        self._years: dict[int, tuple[dict[str, str], dict[str, str]]] = {}

    def maps_for(self, year: int) -> tuple[dict[str, str], dict[str, str]]:
        """연도의 공휴일/절기 맵 (범위 밖 연도는 빈 맵)"""
        if year not in self._years:
            try:
                maps = (holidays_of_year(year), solar_terms_of_year(year))
            except UnsupportedDateRange as e:
                logger.warning("No holiday/solar term data for %d: %s", year, e)
                maps = ({}, {})
            self._years[year] = maps
            logger.debug("Cached calendar maps for %d", year)
        return self._years[year]

    def context_for(self, dates: Iterable[date], memos: Sequence[Memo]) -> AnnotationContext:
        """날짜들이 걸친 모든 연도의 맵을 합침"""
        holidays: dict[str, str] = {}
        solar_terms: dict[str, str] = {}
        for year in sorted({d.year for d in dates}):
            year_holidays, year_terms = self.maps_for(year)
            holidays.update(year_holidays)
            solar_terms.update(year_terms)
        return AnnotationContext(holidays=holidays, solar_terms=solar_terms, memos=memos)

    def retain(self, years: Iterable[int]) -> None:
        """years에 없는 연도 캐시 제거 (보이는 연도가 바뀐 경우)"""
        keep = set(years)
        for year in list(self._years):
            if year not in keep:
                del self._years[year]

    def __contains__(self, year: int) -> bool:
        return year in self._years

    def __len__(self) -> int:
        return len(self._years)


def month_grid(year: int, month: int) -> list[date]:
    """1일이 속한 주의 일요일부터 42일"""
    first = date(year, month, 1)
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(GRID_DAYS)]


def annotate_month(
    year: int,
    month: int,
    memos: Sequence[Memo],
    cache: YearCache | None = None,
) -> list[DayAnnotation]:
    """
    월 달력 전체 칸 주석

    음력 변환 범위 밖의 날짜는 전체를 중단하지 않고 대체 주석으로 채웁니다.
    cache를 넘기면 호출 간에 연도별 맵을 재사용합니다.
    """
    if cache is None:
        cache = YearCache()
    days = month_grid(year, month)
    context = cache.context_for(days, memos)

    annotations = []
    for d in days:
        try:
            annotations.append(annotate(d, context))
        except UnsupportedDateRange as e:
            logger.warning("Rendering %s without lunar annotation: %s", d, e)
            annotations.append(_placeholder(d, memos))
    return annotations

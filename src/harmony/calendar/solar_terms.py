"""
24절기 (Solar terms)

음력 연도별 절기표를 ISO 날짜 키와 한국어 절기명으로 정리합니다.
절기명은 번체/간체 한자, LI_CHUN / LICHUN / Lichun 같은 로마자 표기를 모두 허용합니다.
"""

from __future__ import annotations

import logging
from datetime import date

from harmony.calendar.lunar import solar_terms_table
from harmony.calendar.models import as_date

logger = logging.getLogger(__name__)

# 양력 1월부터의 순서
SOLAR_TERMS = (
    "소한", "대한", "입춘", "우수", "경칩", "춘분",
    "청명", "곡우", "입하", "소만", "망종", "하지",
    "소서", "대서", "입추", "처서", "백로", "추분",
    "한로", "상강", "입동", "소설", "대설", "동지",
)

_HANJA = (
    "小寒", "大寒", "立春", "雨水", "驚蟄", "春分",
    "淸明", "穀雨", "立夏", "小滿", "芒種", "夏至",
    "小暑", "大暑", "立秋", "處暑", "白露", "秋分",
    "寒露", "霜降", "立冬", "小雪", "大雪", "冬至",
)

_SIMPLIFIED = (
    "小寒", "大寒", "立春", "雨水", "惊蛰", "春分",
    "清明", "谷雨", "立夏", "小满", "芒种", "夏至",
    "小暑", "大暑", "立秋", "处暑", "白露", "秋分",
    "寒露", "霜降", "立冬", "小雪", "大雪", "冬至",
)

_PINYIN = (
    "XIAO_HAN", "DA_HAN", "LI_CHUN", "YU_SHUI", "JING_ZHE", "CHUN_FEN",
    "QING_MING", "GU_YU", "LI_XIA", "XIAO_MAN", "MANG_ZHONG", "XIA_ZHI",
    "XIAO_SHU", "DA_SHU", "LI_QIU", "CHU_SHU", "BAI_LU", "QIU_FEN",
    "HAN_LU", "SHUANG_JIANG", "LI_DONG", "XIAO_XUE", "DA_XUE", "DONG_ZHI",
)


def _lookup_key(raw: str) -> str:
    return raw.strip().upper().replace("_", "")


_TERM_NAMES: dict[str, str] = {}
for _names in (_HANJA, _SIMPLIFIED, _PINYIN, SOLAR_TERMS):
    for _raw, _korean in zip(_names, SOLAR_TERMS):
        _TERM_NAMES[_lookup_key(_raw)] = _korean


def normalize_term_name(raw: str) -> str:
    """
    원본 절기명을 한국어 절기명으로 변환

    알 수 없는 이름은 그대로 반환합니다 (예외 없음).

    Examples:
        >>> normalize_term_name("立春")
        '입춘'
        >>> normalize_term_name("Lichun")
        '입춘'
    """
    korean = _TERM_NAMES.get(_lookup_key(raw))
    if korean is None:
        logger.debug("Unrecognized solar term name: %r", raw)
        return raw
    return korean


def _terms_in(years: range, start: date, end: date) -> dict[str, str]:
    found: dict[date, str] = {}
    for year in years:
        for d, raw in solar_terms_table(year).items():
            if start <= d <= end:
                found[d] = normalize_term_name(raw)
    return {d.isoformat(): found[d] for d in sorted(found)}


def solar_terms_of_year(year: int) -> dict[str, str]:
    """
    양력 연도의 24절기 맵

    Returns:
        {"YYYY-MM-DD": 절기명} 24개 (날짜순)

    Raises:
        UnsupportedDateRange: 지원 범위 밖의 연도
    """
    return _terms_in(range(year, year + 1), date(year, 1, 1), date(year, 12, 31))


def solar_terms_between(start: date | str, end: date | str) -> dict[str, str]:
    """기간(양 끝 포함)의 절기 맵 - 연도 경계를 넘는 달력 화면용"""
    start, end = as_date(start), as_date(end)
    if end < start:
        return {}
    return _terms_in(range(start.year, end.year + 1), start, end)

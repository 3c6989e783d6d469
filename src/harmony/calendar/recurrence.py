"""
Memo recurrence matching - 메모 반복 규칙 판정

메모의 기준 날짜와 반복 규칙으로 임의의 날짜에 메모가 표시되는지 판정합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from harmony.calendar.lunar import to_lunar
from harmony.calendar.models import Memo, RepeatType, as_date
from harmony.core.exceptions import UnsupportedDateRange

logger = logging.getLogger(__name__)


def is_active(memo: Memo, target: date | datetime | str) -> bool:
    """
    메모가 target 날짜에 표시되는지 판정

    Rules:
        none: 기준 날짜와 같은 날만
        weekly: 같은 요일
        monthly: 같은 일자 (31일 메모는 30일까지인 달에 표시되지 않음)
        yearly_solar: 같은 양력 월/일
        yearly_lunar: 같은 음력 월/일 (윤달 여부는 비교하지 않음)

    반복 메모는 기준 날짜 이전에는 표시되지 않습니다.
    알 수 없는 반복 규칙, 음력 변환이 불가능한 기준 날짜의 yearly_lunar 메모는 False.

    Raises:
        UnsupportedDateRange: yearly_lunar 판정 중 target이 음력 변환 범위를 벗어난 경우
    """
    anchor = memo.anchor
    target = as_date(target)
    rule = memo.repeat_type

    if rule in (RepeatType.NONE, None, ""):
        return target == anchor

    if target < anchor:
        return False

    if rule is RepeatType.WEEKLY:
        return target.weekday() == anchor.weekday()

    if rule is RepeatType.MONTHLY:
        return target.day == anchor.day

    if rule is RepeatType.YEARLY_SOLAR:
        return (target.month, target.day) == (anchor.month, anchor.day)

    if rule is RepeatType.YEARLY_LUNAR:
        try:
            anchor_lunar = to_lunar(anchor)
        except UnsupportedDateRange:
            logger.warning("Lunar anchor %s of memo %s is out of range", anchor, memo.id)
            return False
        target_lunar = to_lunar(target)
        return (target_lunar.month, target_lunar.day) == (anchor_lunar.month, anchor_lunar.day)

    logger.warning("Unrecognized repeat type %r on memo %s", rule, memo.id)
    return False


def filter_active(memos: Iterable[Memo], target: date | datetime | str) -> list[Memo]:
    """target 날짜에 표시되는 메모 (입력 순서 유지, 중복 제거 없음)"""
    target = as_date(target)
    return [memo for memo in memos if is_active(memo, target)]

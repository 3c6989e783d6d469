"""
Memo reminders - 메모 알림 시각 계산

메모의 reminder_time(HH:MM)과 reminder_offsets(분 단위, 기준 시각 이전)로
해당 날짜의 알림 시각을 계산하고, 지금부터 일정 시간 안에 울릴 알림을 찾습니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from harmony.calendar.models import Memo, as_date
from harmony.calendar.recurrence import is_active

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reminder:
    """울려야 할 알림 하나"""
    memo: Memo
    occurrence: date
    fire_at: datetime
    offset: int

    @property
    def message(self) -> str:
        if self.offset == 0:
            return f"[{self.memo.type.value}] {self.memo.content}"
        return f"[{self.memo.type.value}] {self.memo.content} ({self.offset}분 전)"

    def to_dict(self) -> dict:
        return {
            "memo_id": self.memo.id,
            "content": self.memo.content,
            "occurrence": self.occurrence.isoformat(),
            "fire_at": self.fire_at.isoformat(timespec="minutes"),
            "offset": self.offset,
            "message": self.message,
        }


def parse_time(value: str) -> time:
    """HH:MM 문자열을 time으로 변환"""
    hour, minute = value.strip().split(":")[:2]
    return time(int(hour), int(minute))


def reminder_times(memo: Memo, on: date | datetime | str) -> list[tuple[datetime, int]]:
    """
    메모가 on 날짜에 발생할 때의 알림 시각 목록

    offsets가 비어 있으면 기준 시각 정각에 한 번 알립니다.

    Returns:
        [(알림 시각, offset 분)] 시각순
    """
    if not memo.reminder_time:
        return []
    occurrence = as_date(on)
    if not is_active(memo, occurrence):
        return []

    try:
        at = datetime.combine(occurrence, parse_time(memo.reminder_time))
    except ValueError:
        logger.warning("Invalid reminder_time %r on memo %s", memo.reminder_time, memo.id)
        return []

    offsets = sorted(set(memo.reminder_offsets or [0]), reverse=True)
    return [(at - timedelta(minutes=offset), offset) for offset in offsets]


def due_reminders(
    memos: Iterable[Memo],
    now: datetime,
    window: timedelta = timedelta(hours=1),
) -> list[Reminder]:
    """
    [now, now + window) 구간에 울릴 알림

    메모마다 구간 끝에서 가장 큰 offset만큼 뒤의 날짜까지 발생분을 확인하므로
    하루 이상 앞선 알림도 처리합니다. 완료된 메모는 알리지 않습니다.
    """
    end = now + window
    due: list[Reminder] = []

    for memo in memos:
        if memo.completed:
            continue
        max_offset = max(memo.reminder_offsets or [0])
        last = (end + timedelta(minutes=max_offset)).date()
        occurrences = [
            now.date() + timedelta(days=i) for i in range((last - now.date()).days + 1)
        ]
        for occurrence in occurrences:
            for fire_at, offset in reminder_times(memo, occurrence):
                if now <= fire_at < end:
                    due.append(Reminder(memo, occurrence, fire_at, offset))

    due.sort(key=lambda r: r.fire_at)
    logger.debug("%d reminders due between %s and %s", len(due), now, end)
    return due

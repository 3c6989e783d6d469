"""
캘린더 데이터 모델

메모, 프로필, 음력 날짜, 날짜 주석(annotation) 모델 정의.
메모/프로필의 JSON 형태는 저장소(local / directory)와 공유됩니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class MemoType(Enum):
    """메모 종류"""
    TODO = "todo"
    IDEA = "idea"
    APPOINTMENT = "appointment"


class RepeatType(Enum):
    """메모 반복 규칙"""
    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY_SOLAR = "yearly_solar"
    YEARLY_LUNAR = "yearly_lunar"


def as_date(value: date | datetime | str) -> date:
    """
    date / datetime / ISO 문자열을 시간 성분 없는 date로 고정

    datetime은 그 날짜로 고정됩니다 (정오 고정과 동일한 효과).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class LunarDate:
    """음력 날짜 (LunarConverter가 생성)"""
    year: int
    month: int
    day: int
    is_leap_month: bool = False

    def __str__(self) -> str:
        leap = "윤" if self.is_leap_month else ""
        return f"{leap}{self.month}.{self.day}"

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "is_leap_month": self.is_leap_month,
        }


@dataclass
class Memo:
    """
    사용자 메모

    Attributes:
        id: 고유 ID
        user_id: 소유자 태그
        date: 기준 날짜 (YYYY-MM-DD)
        type: 메모 종류
        content: 내용
        completed: 완료 여부
        created_at: 생성 시각 (ISO)
        repeat_type: 반복 규칙. 알 수 없는 값은 원본 문자열로 유지
        reminder_time: 알림 기준 시각 (HH:MM)
        reminder_offsets: 기준 시각 몇 분 전에 알릴지 목록
    """
    id: str
    date: str
    content: str
    type: MemoType = MemoType.TODO
    user_id: str = "local_user"
    completed: bool = False
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    repeat_type: RepeatType | str = RepeatType.NONE
    reminder_time: str | None = None
    reminder_offsets: list[int] = field(default_factory=list)

    @property
    def anchor(self) -> date:
        """기준 날짜"""
        return as_date(self.date)

    def to_dict(self) -> dict[str, Any]:
        """저장용 딕셔너리로 변환"""
        data: dict[str, Any] = {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date,
            "type": self.type.value if isinstance(self.type, MemoType) else self.type,
            "content": self.content,
            "completed": self.completed,
            "created_at": self.created_at,
            "repeat_type": (
                self.repeat_type.value
                if isinstance(self.repeat_type, RepeatType)
                else self.repeat_type
            ),
        }
        if self.reminder_time is not None:
            data["reminder_time"] = self.reminder_time
        if self.reminder_offsets:
            data["reminder_offsets"] = list(self.reminder_offsets)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Memo:
        """저장된 딕셔너리에서 생성"""
        memo_type = data.get("type", MemoType.TODO.value)
        try:
            memo_type = MemoType(memo_type)
        except ValueError:
            memo_type = MemoType.TODO

        repeat_type = data.get("repeat_type") or RepeatType.NONE.value
        try:
            repeat_type = RepeatType(repeat_type)
        except ValueError:
            pass

        offsets = data.get("reminder_offsets")
        if offsets is None and data.get("reminder_offset") is not None:
            offsets = [data["reminder_offset"]]

        return cls(
            id=str(data["id"]),
            user_id=data.get("user_id", "local_user"),
            date=data["date"],
            type=memo_type,
            content=data.get("content", ""),
            completed=bool(data.get("completed", False)),
            created_at=data.get("created_at") or datetime.now().isoformat(),
            repeat_type=repeat_type,
            reminder_time=data.get("reminder_time"),
            reminder_offsets=[int(o) for o in offsets or []],
        )


@dataclass
class UserProfile:
    """사용자 프로필 (바이오리듬/운세 입력)"""
    id: str
    name: str
    birth_date: str
    birth_time: str | None = None
    notifications_enabled: bool = False
    daily_reminder_time: str = "09:00"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "birth_date": self.birth_date,
            "birth_time": self.birth_time,
            "notifications_enabled": self.notifications_enabled,
            "daily_reminder_time": self.daily_reminder_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            birth_date=data["birth_date"],
            birth_time=data.get("birth_time") or None,
            notifications_enabled=bool(data.get("notifications_enabled", False)),
            daily_reminder_time=data.get("daily_reminder_time") or "09:00",
        )


@dataclass
class DayAnnotation:
    """달력 한 칸의 주석 묶음"""
    date: date
    lunar: LunarDate | None = None
    holiday: str | None = None
    solar_term: str | None = None
    memos: list[Memo] = field(default_factory=list)

    @property
    def iso(self) -> str:
        return self.date.isoformat()

    @property
    def is_holiday(self) -> bool:
        return self.holiday is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.iso,
            "lunar": self.lunar.to_dict() if self.lunar else None,
            "holiday": self.holiday,
            "solar_term": self.solar_term,
            "memos": [memo.to_dict() for memo in self.memos],
        }

"""
Memo Store Base Interface

메모/프로필 저장소가 구현해야 하는 추상 인터페이스와 JSON 변환 헬퍼.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Optional

from harmony.calendar.models import Memo, UserProfile
from harmony.core.exceptions import StorageError


def memos_to_json(memos: list[Memo]) -> str:
    """메모 목록을 저장용 JSON으로 변환"""
    return json.dumps([memo.to_dict() for memo in memos], ensure_ascii=False, indent=2)


def memos_from_json(content: Optional[str], location: str) -> list[Memo]:
    """
    저장된 JSON을 메모 목록으로 변환

    Raises:
        StorageError: JSON 형식 오류
    """
    if not content:
        return []
    try:
        data = json.loads(content)
        if not isinstance(data, list):
            raise StorageError("Memo data must be a JSON array", location=location)
        return [Memo.from_dict(item) for item in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise StorageError(f"Invalid memo data ({e})", location=location) from e


def profile_to_json(profile: UserProfile) -> str:
    return json.dumps(profile.to_dict(), ensure_ascii=False, indent=2)


def profile_from_json(content: Optional[str], location: str) -> Optional[UserProfile]:
    """
    저장된 JSON을 프로필로 변환

    Raises:
        StorageError: JSON 형식 오류
    """
    if not content:
        return None
    try:
        return UserProfile.from_dict(json.loads(content))
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
        raise StorageError(f"Invalid profile data ({e})", location=location) from e


class MemoStore(ABC):
    """
    메모/프로필 저장소 추상 인터페이스

    Example:
        async with DirectoryStore(path) as store:
            memos = await store.load_all_memos()
            await store.save_all_memos(memos)
    """

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> None:
        """저장소 열기 (필요한 경우)"""

    async def close(self) -> None:
        """저장소 닫기 (필요한 경우)"""

    @abstractmethod
    async def load_all_memos(self) -> list[Memo]:
        """저장된 메모 전체 (저장 순서 유지)"""

    @abstractmethod
    async def save_all_memos(self, memos: list[Memo]) -> None:
        """메모 전체 저장 (덮어쓰기)"""

    @abstractmethod
    async def load_profile(self) -> Optional[UserProfile]:
        """저장된 프로필 (없으면 None)"""

    @abstractmethod
    async def save_profile(self, profile: UserProfile) -> None:
        """프로필 저장"""

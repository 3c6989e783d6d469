"""
Memo book - 메모 추가/수정/완료/삭제

저장소에서 메모 전체를 읽어 변경한 뒤 전체를 다시 저장합니다.
새 메모는 목록 앞에 추가되므로 저장 순서는 최신순입니다.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Optional

from harmony.calendar.models import Memo, MemoType, RepeatType, as_date
from harmony.calendar.recurrence import filter_active
from harmony.core.exceptions import MemoNotFoundError
from harmony.storage.base import MemoStore

logger = logging.getLogger(__name__)

LOCAL_USER = "local_user"


class MemoBook:
    """
    메모 CRUD

    Example:
        async with DirectoryStore(path) as store:
            book = MemoBook(store)
            memo = await book.add(date(2024, 2, 10), "세배", repeat_type=RepeatType.YEARLY_LUNAR)
            todays = await book.for_date(date.today())
    """

    def __init__(self, store: MemoStore):
        self.store = store

    async def all(self) -> list[Memo]:
        """저장된 메모 전체 (최신순)"""
        return await self.store.load_all_memos()

    async def for_date(self, target: date | datetime | str) -> list[Memo]:
        """target 날짜에 표시되는 메모"""
        return filter_active(await self.all(), target)

    async def get(self, memo_id: str) -> Memo:
        """
        ID로 메모 조회

        Raises:
            MemoNotFoundError: 없는 ID
        """
        for memo in await self.all():
            if memo.id == memo_id:
                return memo
        raise MemoNotFoundError(memo_id)

    async def add(
        self,
        on: date | datetime | str,
        content: str,
        memo_type: MemoType = MemoType.TODO,
        repeat_type: RepeatType = RepeatType.NONE,
        reminder_time: Optional[str] = None,
        reminder_offsets: Optional[list[int]] = None,
    ) -> Memo:
        """
        메모 추가

        Raises:
            ValueError: 빈 내용
        """
        content = content.strip()
        if not content:
            raise ValueError("Memo content must not be empty")

        memo = Memo(
            id=str(uuid.uuid4()),
            user_id=LOCAL_USER,
            date=as_date(on).isoformat(),
            type=memo_type,
            content=content,
            completed=False,
            created_at=datetime.now().isoformat(),
            repeat_type=repeat_type,
            reminder_time=reminder_time,
            reminder_offsets=list(reminder_offsets or []),
        )
        memos = await self.all()
        await self.store.save_all_memos([memo, *memos])
        logger.info("Added memo %s on %s (%s)", memo.id, memo.date, repeat_type.value)
        return memo

    async def _replace(self, memo_id: str, change) -> Memo:
        memos = await self.all()
        for index, memo in enumerate(memos):
            if memo.id == memo_id:
                change(memo)
                memos[index] = memo
                await self.store.save_all_memos(memos)
                return memo
        raise MemoNotFoundError(memo_id)

    async def toggle(self, memo_id: str) -> Memo:
        """완료 여부 전환"""

        def flip(memo: Memo) -> None:
            memo.completed = not memo.completed

        memo = await self._replace(memo_id, flip)
        logger.info("Memo %s completed=%s", memo_id, memo.completed)
        return memo

    async def edit(
        self,
        memo_id: str,
        content: Optional[str] = None,
        on: date | datetime | str | None = None,
        memo_type: Optional[MemoType] = None,
        repeat_type: Optional[RepeatType] = None,
        reminder_time: Optional[str] = None,
        reminder_offsets: Optional[list[int]] = None,
    ) -> Memo:
        """주어진 항목만 수정"""
        if content is not None and not content.strip():
            raise ValueError("Memo content must not be empty")

        def update(memo: Memo) -> None:
            if content is not None:
                memo.content = content.strip()
            if on is not None:
                memo.date = as_date(on).isoformat()
            if memo_type is not None:
                memo.type = memo_type
            if repeat_type is not None:
                memo.repeat_type = repeat_type
            if reminder_time is not None:
                memo.reminder_time = reminder_time or None
            if reminder_offsets is not None:
                memo.reminder_offsets = list(reminder_offsets)

        memo = await self._replace(memo_id, update)
        logger.info("Edited memo %s", memo_id)
        return memo

    async def delete(self, memo_id: str) -> None:
        """
        메모 삭제

        Raises:
            MemoNotFoundError: 없는 ID
        """
        memos = await self.all()
        remaining = [memo for memo in memos if memo.id != memo_id]
        if len(remaining) == len(memos):
            raise MemoNotFoundError(memo_id)
        await self.store.save_all_memos(remaining)
        logger.info("Deleted memo %s", memo_id)

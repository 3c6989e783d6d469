"""
Daily Harmony CLI - Click-based command line interface.

Usage:
    harmony month                      # This month's calendar
    harmony month 2024 2               # February 2024
    harmony day 2024-02-10             # One day in detail
    harmony holidays 2024              # Public holidays
    harmony terms 2024                 # 24 solar terms
    harmony memo add 2024-09-17 "성묘" --repeat yearly_lunar
    harmony profile set --name 홍길동 --birth-date 1990-05-01
    harmony biorhythm                  # Today's biorhythm
    harmony fortune                    # Today's fortune
    harmony reminders                  # Reminders due within the hour
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import uuid
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timedelta
from functools import wraps
from typing import Any, TypeVar

import click

from harmony.biorhythm import biorhythm
from harmony.calendar.annotator import YearCache, annotate, annotate_month
from harmony.calendar.holidays import holidays_of_year
from harmony.calendar.models import DayAnnotation, Memo, MemoType, RepeatType, UserProfile
from harmony.calendar.reminders import due_reminders
from harmony.calendar.solar_terms import solar_terms_of_year
from harmony.core.config import Config
from harmony.core.exceptions import HarmonyError
from harmony.storage import MemoBook, MemoStore, open_store

# Windows UTF-8 encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

T = TypeVar("T")

WEEKDAYS = ["일", "월", "화", "수", "목", "금", "토"]
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def async_command(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Decorator to convert async function to Click command."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def harmony_errors(f: Callable[..., T]) -> Callable[..., T]:
    """Report HarmonyError as a Click error (exit code 1)."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except HarmonyError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _to_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


async def _run_with_store(config: Config, action: Callable[[MemoStore], Awaitable[T]]) -> T:
    async with open_store(config) as store:
        return await action(store)


def _memo_line(memo: Memo) -> str:
    mark = "[x]" if memo.completed else "[ ]"
    repeat = memo.repeat_type.value if isinstance(memo.repeat_type, RepeatType) else memo.repeat_type
    extra = "" if repeat == RepeatType.NONE.value else f" ({repeat})"
    return f"{mark} {memo.type.value:<11} {memo.content}{extra}  #{memo.id[:8]}"


def _day_heading(day: DayAnnotation) -> str:
    parts = [f"{day.iso} ({WEEKDAYS[(day.date.weekday() + 1) % 7]})"]
    if day.lunar:
        parts.append(f"음력 {day.lunar}")
    if day.holiday:
        parts.append(day.holiday)
    if day.solar_term:
        parts.append(day.solar_term)
    return "  ".join(parts)


@click.group(invoke_without_command=True)
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), help="YAML config file")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
@harmony_errors
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Daily Harmony - Korean lunar calendar and journal

    Calendar:
        harmony month 2024 2
        harmony day 2024-02-10

    Memos and profile:
        harmony memo add 2024-02-10 "세배"
        harmony profile show
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Config(config_path)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("year", type=int, required=False)
@click.argument("month", type=click.IntRange(1, 12), required=False)
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def month(config: Config, year: int | None, month: int | None, as_json: bool) -> None:
    """Month grid with lunar dates, holidays, solar terms and memos."""
    today = date.today()
    year = year or today.year
    month = month or today.month

    memos = await _run_with_store(config, lambda store: store.load_all_memos())
    days = annotate_month(year, month, memos)

    if as_json:
        _echo_json([day.to_dict() for day in days])
        return

    click.echo(f"\n=== {year}년 {month:02d}월 ===\n")
    click.echo(" ".join(f"{name:^10}" for name in WEEKDAYS))
    for week in range(0, len(days), 7):
        cells = days[week:week + 7]
        if all(cell.date.month != month for cell in cells):
            continue
        click.echo(" ".join(
            f"{cell.date.day:>2}{'*' if cell.is_holiday else ' '}{len(cell.memos) or '':<7}"
            if cell.date.month == month else " " * 10
            for cell in cells
        ))

    click.echo("")
    for day in days:
        if day.date.month == month and (day.holiday or day.solar_term or day.memos):
            click.echo(f"  {_day_heading(day)}")
            for item in day.memos:
                click.echo(f"      {_memo_line(item)}")


@cli.command()
@click.argument("target", type=DATE_TYPE, required=False)
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def day(config: Config, target: datetime | None, as_json: bool) -> None:
    """One day: lunar date, holiday, solar term and active memos."""
    d = _to_date(target)
    memos = await _run_with_store(config, lambda store: store.load_all_memos())
    context = YearCache().context_for([d], memos)
    annotation = annotate(d, context)

    if as_json:
        _echo_json(annotation.to_dict())
        return

    click.echo(f"\n{_day_heading(annotation)}\n")
    if not annotation.memos:
        click.echo("  메모가 없습니다.")
    for item in annotation.memos:
        click.echo(f"  {_memo_line(item)}")


@cli.command()
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@harmony_errors
def holidays(year: int, as_json: bool) -> None:
    """Korean public holidays including substitute holidays."""
    result = holidays_of_year(year)
    if as_json:
        _echo_json(result)
        return
    click.echo(f"\n=== {year}년 공휴일 ===\n")
    for iso, name in result.items():
        weekday = WEEKDAYS[(date.fromisoformat(iso).weekday() + 1) % 7]
        click.echo(f"  {iso} ({weekday})  {name}")


@cli.command()
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@harmony_errors
def terms(year: int, as_json: bool) -> None:
    """The 24 solar terms of a year."""
    result = solar_terms_of_year(year)
    if as_json:
        _echo_json(result)
        return
    click.echo(f"\n=== {year}년 24절기 ===\n")
    for iso, name in result.items():
        click.echo(f"  {iso}  {name}")


@cli.group()
def memo() -> None:
    """Memo management."""
    pass


@memo.command("add")
@click.argument("on", type=DATE_TYPE)
@click.argument("content")
@click.option("--type", "memo_type", type=click.Choice([t.value for t in MemoType]), default=MemoType.TODO.value)
@click.option("--repeat", type=click.Choice([r.value for r in RepeatType]), default=RepeatType.NONE.value)
@click.option("--reminder-time", help="Reminder time (HH:MM)")
@click.option("--offset", "offsets", type=int, multiple=True, help="Minutes before reminder time")
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def memo_add(
    config: Config,
    on: datetime,
    content: str,
    memo_type: str,
    repeat: str,
    reminder_time: str | None,
    offsets: tuple[int, ...],
    as_json: bool,
) -> None:
    """Add a memo on a date."""
    try:
        created = await _run_with_store(
            config,
            lambda store: MemoBook(store).add(
                on.date(),
                content,
                memo_type=MemoType(memo_type),
                repeat_type=RepeatType(repeat),
                reminder_time=reminder_time,
                reminder_offsets=list(offsets),
            ),
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="content") from e

    if as_json:
        _echo_json(created.to_dict())
    else:
        click.echo(f"메모 추가 완료: {created.date} {created.content}  #{created.id}")


@memo.command("list")
@click.option("--date", "on", type=DATE_TYPE, help="Only memos active on this date")
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def memo_list(config: Config, on: datetime | None, as_json: bool) -> None:
    """List memos (newest first)."""
    if on:
        memos = await _run_with_store(config, lambda store: MemoBook(store).for_date(on.date()))
    else:
        memos = await _run_with_store(config, lambda store: MemoBook(store).all())

    if as_json:
        _echo_json([m.to_dict() for m in memos])
        return
    if not memos:
        click.echo("메모가 없습니다.")
    for m in memos:
        click.echo(f"  {m.date}  {_memo_line(m)}")


@memo.command("toggle")
@click.argument("memo_id")
@click.pass_obj
@harmony_errors
@async_command
async def memo_toggle(config: Config, memo_id: str) -> None:
    """Toggle memo completion."""
    toggled = await _run_with_store(config, lambda store: MemoBook(store).toggle(memo_id))
    click.echo(_memo_line(toggled))


@memo.command("edit")
@click.argument("memo_id")
@click.option("--content")
@click.option("--date", "on", type=DATE_TYPE)
@click.option("--type", "memo_type", type=click.Choice([t.value for t in MemoType]))
@click.option("--repeat", type=click.Choice([r.value for r in RepeatType]))
@click.option("--reminder-time")
@click.option("--offset", "offsets", type=int, multiple=True)
@click.pass_obj
@harmony_errors
@async_command
async def memo_edit(
    config: Config,
    memo_id: str,
    content: str | None,
    on: datetime | None,
    memo_type: str | None,
    repeat: str | None,
    reminder_time: str | None,
    offsets: tuple[int, ...],
) -> None:
    """Edit memo fields."""
    try:
        edited = await _run_with_store(
            config,
            lambda store: MemoBook(store).edit(
                memo_id,
                content=content,
                on=on.date() if on else None,
                memo_type=MemoType(memo_type) if memo_type else None,
                repeat_type=RepeatType(repeat) if repeat else None,
                reminder_time=reminder_time,
                reminder_offsets=list(offsets) if offsets else None,
            ),
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--content") from e
    click.echo(f"  {edited.date}  {_memo_line(edited)}")


@memo.command("delete")
@click.argument("memo_id")
@click.confirmation_option(prompt="삭제하시겠습니까?")
@click.pass_obj
@harmony_errors
@async_command
async def memo_delete(config: Config, memo_id: str) -> None:
    """Delete a memo."""
    await _run_with_store(config, lambda store: MemoBook(store).delete(memo_id))
    click.echo(f"삭제 완료: {memo_id}")


@cli.group()
def profile() -> None:
    """User profile."""
    pass


@profile.command("set")
@click.option("--name", required=True)
@click.option("--birth-date", type=DATE_TYPE, required=True)
@click.option("--birth-time", help="HH:MM")
@click.option("--notify/--no-notify", default=False, help="Daily reminder notifications")
@click.option("--reminder-time", default="09:00", show_default=True)
@click.pass_obj
@harmony_errors
@async_command
async def profile_set(
    config: Config,
    name: str,
    birth_date: datetime,
    birth_time: str | None,
    notify: bool,
    reminder_time: str,
) -> None:
    """Create or replace the profile."""

    async def save(store: MemoStore) -> UserProfile:
        current = await store.load_profile()
        updated = UserProfile(
            id=current.id if current else uuid.uuid4().hex[:9],
            name=name,
            birth_date=birth_date.date().isoformat(),
            birth_time=birth_time or None,
            notifications_enabled=notify,
            daily_reminder_time=reminder_time,
        )
        await store.save_profile(updated)
        return updated

    saved = await _run_with_store(config, save)
    click.echo(f"프로필 저장 완료: {saved.name} ({saved.birth_date})")


@profile.command("show")
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def profile_show(config: Config, as_json: bool) -> None:
    """Show the profile."""
    current = await _run_with_store(config, lambda store: store.load_profile())
    if current is None:
        raise click.ClickException("프로필이 없습니다. 'harmony profile set'으로 설정해주세요.")
    if as_json:
        _echo_json(current.to_dict())
        return
    click.echo(f"  이름: {current.name}")
    click.echo(f"  생년월일: {current.birth_date} {current.birth_time or ''}".rstrip())
    state = "켜짐" if current.notifications_enabled else "꺼짐"
    click.echo(f"  알림: {state} ({current.daily_reminder_time})")


async def _require_profile(config: Config) -> UserProfile:
    current = await _run_with_store(config, lambda store: store.load_profile())
    if current is None:
        raise click.ClickException("프로필을 설정해주세요. (harmony profile set)")
    return current


@cli.command("biorhythm")
@click.argument("target", type=DATE_TYPE, required=False)
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def biorhythm_command(config: Config, target: datetime | None, as_json: bool) -> None:
    """Physical / emotional / intellectual biorhythm."""
    current = await _require_profile(config)
    try:
        result = biorhythm(current.birth_date, _to_date(target))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="target") from e

    if as_json:
        _echo_json(result.to_dict())
        return
    click.echo(f"\n=== {result.date} 바이오리듬 ===\n")
    click.echo(f"  신체: {result.physical:>4}%")
    click.echo(f"  감성: {result.emotional:>4}%")
    click.echo(f"  지성: {result.intellectual:>4}%")


@cli.command()
@click.argument("target", type=DATE_TYPE, required=False)
@click.pass_obj
@harmony_errors
@async_command
async def fortune(config: Config, target: datetime | None) -> None:
    """AI daily fortune from the profile's birth data."""
    from harmony.llm import FortuneClient

    current = await _require_profile(config)
    client = FortuneClient(
        api_key=config.anthropic_api_key,
        model=config.fortune_model,
        max_tokens=config.fortune_max_tokens,
    )
    text = await client.daily_fortune(current.birth_date, current.birth_time, _to_date(target))
    click.echo(text)


@cli.command()
@click.option("--window", type=int, help="Look-ahead minutes (default from config)")
@click.option("--json", "as_json", is_flag=True, help="JSON output")
@click.pass_obj
@harmony_errors
@async_command
async def reminders(config: Config, window: int | None, as_json: bool) -> None:
    """Memo reminders due from now."""
    minutes = window if window is not None else config.reminder_window_minutes
    memos = await _run_with_store(config, lambda store: store.load_all_memos())
    due = due_reminders(memos, datetime.now(), timedelta(minutes=minutes))

    if as_json:
        _echo_json([r.to_dict() for r in due])
        return
    if not due:
        click.echo("예정된 알림이 없습니다.")
    for r in due:
        click.echo(f"  {r.fire_at:%Y-%m-%d %H:%M}  {r.message}")


if __name__ == "__main__":
    cli()

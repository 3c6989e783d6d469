"""
Calendar engine for Daily Harmony

Components:
- lunar: Lunar/Solar calendar conversion and solar term tables
- holidays: Korean public holidays with substitute holidays
- solar_terms: 24 solar terms with Korean names
- recurrence: Memo repetition matching
- annotator: Per-day annotation for month grids
- reminders: Memo reminder scheduling
"""

from harmony.calendar.annotator import (
    AnnotationContext,
    YearCache,
    annotate,
    annotate_month,
    month_grid,
)
from harmony.calendar.holidays import holidays_of_year
from harmony.calendar.lunar import lunar_date, lunar_new_year, to_lunar
from harmony.calendar.models import (
    DayAnnotation,
    LunarDate,
    Memo,
    MemoType,
    RepeatType,
    UserProfile,
)
from harmony.calendar.recurrence import filter_active, is_active
from harmony.calendar.reminders import Reminder, due_reminders, reminder_times
from harmony.calendar.solar_terms import normalize_term_name, solar_terms_of_year

__all__ = [
    "AnnotationContext",
    "YearCache",
    "annotate",
    "annotate_month",
    "month_grid",
    "holidays_of_year",
    "lunar_date",
    "lunar_new_year",
    "to_lunar",
    "DayAnnotation",
    "LunarDate",
    "Memo",
    "MemoType",
    "RepeatType",
    "UserProfile",
    "filter_active",
    "is_active",
    "Reminder",
    "due_reminders",
    "reminder_times",
    "normalize_term_name",
    "solar_terms_of_year",
]

"""
Weekly Review Tracking

A week is keyed by the calendar day it starts on (Sunday unless
WEEK_START_DAY says otherwise). Reviewing a completed week pays a flat
bonus exactly once per week.

Only the most recently completed week is ever offered for review; weeks
skipped before that are not queued up.
"""

from collections import Counter
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from moodlet.gamification.constants import MOOD_TREND_THRESHOLD, POINTS_WEEKLY_REVIEW
from moodlet.gamification.points_system import award_points
from moodlet.models.mood import MoodEntry
from moodlet.models.profile import UserProfile
from moodlet.utils.datetime_helpers import DateLike, start_of_week, to_day

logger = logging.getLogger(__name__)


def has_reviewed_week(profile: UserProfile, week_start: DateLike) -> bool:
    """Whether the week containing week_start has been reviewed (time of day ignored)"""
    return start_of_week(week_start) in profile.reviewed_week_starts


def mark_week_reviewed(profile: UserProfile, week_start: DateLike) -> int:
    """
    Record a week as reviewed and pay the weekly bonus

    Args:
        profile: Profile to mutate
        week_start: Any day of the reviewed week; normalized to its first day

    Returns:
        Points awarded (0 if the week was already reviewed)
    """
    key = start_of_week(week_start)

    if key in profile.reviewed_week_starts:
        logger.debug(f"Profile {profile.id} already reviewed week of {key}")
        return 0

    profile.reviewed_week_starts.add(key)
    award_points(profile, POINTS_WEEKLY_REVIEW, reason=f"weekly review ({key})")
    logger.info(f"Profile {profile.id} reviewed week of {key}")
    return POINTS_WEEKLY_REVIEW


def last_completed_week_start(today: DateLike) -> date:
    """First day of the week before the one containing today"""
    return start_of_week(today) - timedelta(days=7)


def unreviewed_week_start(profile: UserProfile, today: DateLike) -> Optional[date]:
    """
    Get the week awaiting review, if any

    Returns:
        Start of the most recently completed week if it has not been
        reviewed, else None. The in-progress week is never returned.
    """
    week_start = last_completed_week_start(today)
    if week_start in profile.reviewed_week_starts:
        return None
    return week_start


def is_week_complete(week_start: DateLike, today: DateLike) -> bool:
    """True iff the week containing week_start ended before the week containing today"""
    return start_of_week(week_start) < start_of_week(today)


def week_date_range(week_start: DateLike) -> Tuple[date, date]:
    """(first day, last day) of the week starting on week_start"""
    start = to_day(week_start)
    return start, start + timedelta(days=6)


class MoodTrend(str, Enum):
    """Direction of the average mood compared with the previous week"""
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"

    @property
    def description(self) -> str:
        return _TREND_DESCRIPTIONS[self]


_TREND_DESCRIPTIONS = {
    MoodTrend.UP: "Mood improved",
    MoodTrend.DOWN: "Mood dipped",
    MoodTrend.NEUTRAL: "Mood steady",
}


def mood_trend(current_average: Optional[float], previous_average: Optional[float]) -> MoodTrend:
    """Neutral unless both weeks have data and the averages differ by more than the threshold"""
    if current_average is None or previous_average is None:
        return MoodTrend.NEUTRAL
    diff = current_average - previous_average
    if diff > MOOD_TREND_THRESHOLD:
        return MoodTrend.UP
    if diff < -MOOD_TREND_THRESHOLD:
        return MoodTrend.DOWN
    return MoodTrend.NEUTRAL


def _entries_in(entries: Iterable[MoodEntry], start: date, end: date) -> List[MoodEntry]:
    return [e for e in entries if start <= to_day(e.timestamp) <= end]


def _average_mood(entries: List[MoodEntry]) -> Optional[float]:
    if not entries:
        return None
    return sum(e.mood.value for e in entries) / len(entries)


def summarize_week(
    entries: Iterable[MoodEntry],
    week_start: DateLike,
    previous_entries: Iterable[MoodEntry] = ()
) -> Dict[str, any]:
    """
    Summarize a week's check-ins for the review screen

    Args:
        entries: Mood entries; those outside the week are ignored
        week_start: First day of the week
        previous_entries: Entries of the week before; those outside it are ignored

    Returns:
        {
            'week_start': date,
            'week_end': date,
            'entry_count': int,
            'days_with_entries': int,
            'average_mood': Optional[float],
            'dominant_mood': Optional[Mood],
            'top_activities': list[tuple[str, int]],  # at most 5, most frequent first
            'previous_entry_count': int,
            'previous_average_mood': Optional[float],
            'mood_trend': MoodTrend
        }
    """
    start, end = week_date_range(week_start)
    week_entries = _entries_in(entries, start, end)
    prev_entries = _entries_in(previous_entries, start - timedelta(days=7), start - timedelta(days=1))

    mood_counts = Counter(e.mood for e in week_entries)
    activity_counts = Counter(tag for e in week_entries for tag in e.activity_tags)

    average_mood = _average_mood(week_entries)
    previous_average = _average_mood(prev_entries)

    dominant_mood = None
    if mood_counts:
        # Ties go to the higher mood
        dominant_mood = max(mood_counts, key=lambda m: (mood_counts[m], m.value))

    return {
        "week_start": start,
        "week_end": end,
        "entry_count": len(week_entries),
        "days_with_entries": len({to_day(e.timestamp) for e in week_entries}),
        "average_mood": round(average_mood, 2) if average_mood is not None else None,
        "dominant_mood": dominant_mood,
        "top_activities": sorted(activity_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:5],
        "previous_entry_count": len(prev_entries),
        "previous_average_mood": round(previous_average, 2) if previous_average is not None else None,
        "mood_trend": mood_trend(average_mood, previous_average),
    }

"""
Points Ledger

Manages point awards, spends and the per-day earning cap.

Point Award Rules:
- Mood logged: 1 point
- At least one context tag: +1 point
- Non-empty reflection: +2 points
- Weekly review completed: 3 points
- Streak milestones: 2-25 points

Only the first 3 check-ins of a calendar day earn points. Points only leave
the ledger through spend_points().
"""

from typing import Iterable, List, Optional
import logging

from moodlet.exceptions import ValidationError
from moodlet.gamification.constants import (
    MAX_DAILY_POINT_ENTRIES,
    POINTS_CONTEXT_TAGS,
    POINTS_MOOD_LOG,
    POINTS_REFLECTION,
    STREAK_MILESTONE_BONUSES,
)
from moodlet.models.mood import MoodEntry
from moodlet.models.profile import UserProfile
from moodlet.utils.datetime_helpers import DateLike, is_same_day

logger = logging.getLogger(__name__)


def can_earn_points(entries: Iterable[MoodEntry], day: Optional[DateLike] = None) -> bool:
    """
    Check whether another check-in may earn points

    Must be called BEFORE the new entry is created; points already awarded
    are never revoked.

    Args:
        entries: Mood entries to count (typically today's entries)
        day: Calendar day to count for. When omitted, every entry passed in
            is assumed to belong to the day being checked.

    Returns:
        True iff fewer than MAX_DAILY_POINT_ENTRIES point-earning entries exist
    """
    earning = [
        entry for entry in entries
        if entry.earned_points and (day is None or is_same_day(entry.timestamp, day))
    ]
    return len(earning) < MAX_DAILY_POINT_ENTRIES


def calculate_points_for_entry(
    mood_logged: bool,
    tags_added: bool,
    reflection_written: bool
) -> int:
    """
    Calculate points for a check-in

    Each trigger is independent; mood valence never matters.
    """
    points = 0
    if mood_logged:
        points += POINTS_MOOD_LOG
    if tags_added:
        points += POINTS_CONTEXT_TAGS
    if reflection_written:
        points += POINTS_REFLECTION
    return points


def points_for_entry(entry: MoodEntry) -> int:
    """Points a stored entry is worth, from its tags and note"""
    return calculate_points_for_entry(
        mood_logged=True,
        tags_added=entry.has_context_tags,
        reflection_written=entry.has_reflection,
    )


def award_points(profile: UserProfile, amount: int, reason: str = "check-in") -> int:
    """
    Add points to the profile

    Args:
        profile: Profile to credit
        amount: Non-negative number of points
        reason: Human-readable description for the log

    Returns:
        New point total

    Raises:
        ValidationError: If amount is negative
    """
    if amount < 0:
        raise ValidationError(
            message="Point awards must be non-negative",
            field="amount",
            value=amount,
            profile_id=profile.id,
            operation="award_points"
        )

    profile.total_points += amount

    logger.info(
        f"Awarded {amount} points to profile {profile.id} for {reason}. "
        f"Total: {profile.total_points}"
    )
    return profile.total_points


def spend_points(profile: UserProfile, amount: int) -> bool:
    """
    Deduct points if the balance covers the amount

    Returns:
        False (and no change) when total_points < amount, True otherwise
    """
    if amount < 0:
        raise ValidationError(
            message="Point spends must be non-negative",
            field="amount",
            value=amount,
            profile_id=profile.id,
            operation="spend_points"
        )

    if profile.total_points < amount:
        logger.debug(
            f"Profile {profile.id} cannot spend {amount} points "
            f"(balance {profile.total_points})"
        )
        return False

    profile.total_points -= amount
    logger.info(f"Profile {profile.id} spent {amount} points. Remaining: {profile.total_points}")
    return True


def check_and_award_streak_bonus(profile: UserProfile) -> int:
    """
    Award the milestone bonus if the current streak sits exactly on a milestone

    Each milestone pays once per streak: the paid milestone is recorded on the
    profile, so repeated calls on an unchanged streak pay nothing. A restarted
    streak clears the record and can earn the milestones again.

    Returns:
        Bonus awarded (0 if none)
    """
    streak = profile.current_streak
    bonus = STREAK_MILESTONE_BONUSES.get(streak, 0)

    if bonus == 0:
        return 0

    paid = profile.last_streak_milestone_paid
    if paid is not None and paid >= streak:
        logger.debug(f"Profile {profile.id} already received the {streak}-day bonus")
        return 0

    award_points(profile, bonus, reason=f"{streak}-day streak milestone")
    profile.last_streak_milestone_paid = streak
    return bonus


def count_point_entries(entries: Iterable[MoodEntry], day: DateLike) -> int:
    """Number of point-earning entries on a day"""
    return len(_earning_entries_on(entries, day))


def remaining_point_entries(entries: Iterable[MoodEntry], day: DateLike) -> int:
    """How many more check-ins can earn points on a day"""
    return max(0, MAX_DAILY_POINT_ENTRIES - count_point_entries(entries, day))


def _earning_entries_on(entries: Iterable[MoodEntry], day: DateLike) -> List[MoodEntry]:
    return [e for e in entries if e.earned_points and is_same_day(e.timestamp, day)]

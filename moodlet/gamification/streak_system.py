"""
Daily Check-In Streak Tracking

Tracks how many consecutive calendar days the user has checked in.

Rules:
- Several check-ins on the same day count once
- A check-in the next day continues the streak
- A single missed day is forgiven once per streak (grace period)
- Any longer gap restarts the streak at 1
- longest_streak never drops below current_streak

Milestones (3, 7, 14, 30, 100 days) drive bonus points and UI projections.
"""

from typing import Dict, Optional
import logging

from moodlet.gamification.constants import GRACE_PERIOD_DAYS, STREAK_MILESTONES
from moodlet.models.profile import UserProfile
from moodlet.utils.datetime_helpers import DateLike, days_between, to_day

logger = logging.getLogger(__name__)


def update_streak(profile: UserProfile, new_entry_day: DateLike) -> Dict[str, any]:
    """
    Update the profile's streak for a check-in on new_entry_day

    Args:
        profile: Profile to mutate
        new_entry_day: Day (or timestamp) of the new check-in

    Returns:
        {
            'current_streak': int,
            'longest_streak': int,
            'old_streak': int,
            'grace_used': bool,  # this check-in consumed the grace period
            'streak_broken': bool,
            'milestone': Optional[int],
            'message': str
        }
    """
    entry_day = to_day(new_entry_day)
    old_streak = profile.current_streak
    grace_used = False
    streak_broken = False

    if profile.last_log_date is None:
        _restart(profile)
        profile.last_log_date = entry_day
        message = "Streak started! Day 1 🎉"
        logger.info(f"Profile {profile.id} started first streak on {entry_day}")
        return _result(profile, old_streak, grace_used, streak_broken, message)

    gap = days_between(profile.last_log_date, entry_day)

    if gap <= 0:
        # Same day (or a back-dated entry): counters stay as they are
        message = f"Streak continues! Day {profile.current_streak} 🔥"
        logger.debug(f"Profile {profile.id} checked in again on {entry_day}, streak unchanged")
        entry_day = max(entry_day, profile.last_log_date)

    elif gap == 1:
        profile.current_streak += 1
        profile.streak_grace_used = False
        message = f"Streak continues! Day {profile.current_streak} 🔥"

    elif gap == GRACE_PERIOD_DAYS and not profile.streak_grace_used:
        profile.current_streak += 1
        profile.streak_grace_used = True
        grace_used = True
        message = f"Missed day forgiven! Day {profile.current_streak} 🛡️"
        logger.info(f"Profile {profile.id} used streak grace on {entry_day}")

    else:
        streak_broken = True
        _restart(profile)
        message = f"Streak reset. Previous: {old_streak} days. Starting fresh! Day 1 💪"
        logger.info(
            f"Profile {profile.id} streak broken. "
            f"Was {old_streak}, gap was {gap} days"
        )

    profile.longest_streak = max(profile.longest_streak, profile.current_streak)
    profile.last_log_date = entry_day

    if profile.current_streak != old_streak:
        logger.info(
            f"Updated streak for profile {profile.id}: "
            f"{old_streak} → {profile.current_streak} days"
        )

    return _result(profile, old_streak, grace_used, streak_broken, message)


def _restart(profile: UserProfile) -> None:
    profile.current_streak = 1
    profile.streak_grace_used = False
    profile.last_streak_milestone_paid = None
    profile.longest_streak = max(profile.longest_streak, 1)


def _result(
    profile: UserProfile,
    old_streak: int,
    grace_used: bool,
    streak_broken: bool,
    message: str
) -> Dict[str, any]:
    milestone = streak_milestone_reached(profile)
    if milestone is not None and profile.current_streak != old_streak:
        message += f"\n🏆 {milestone}-day milestone reached!"

    return {
        "current_streak": profile.current_streak,
        "longest_streak": profile.longest_streak,
        "old_streak": old_streak,
        "grace_used": grace_used,
        "streak_broken": streak_broken,
        "milestone": milestone,
        "message": message,
    }


def is_streak_at_risk(profile: UserProfile, today: DateLike) -> bool:
    """
    True iff exactly one day has passed since the last check-in and grace is unused

    Drives reminder messaging; never mutates the profile.
    """
    if profile.last_log_date is None:
        return False
    return days_between(profile.last_log_date, today) == 1 and not profile.streak_grace_used


def streak_milestone_reached(profile: UserProfile) -> Optional[int]:
    """Return the milestone the current streak sits exactly on, if any"""
    if profile.current_streak in STREAK_MILESTONES:
        return profile.current_streak
    return None


def next_milestone(profile: UserProfile) -> int:
    """First milestone above the current streak (current + 1 once all are passed)"""
    for milestone in STREAK_MILESTONES:
        if profile.current_streak < milestone:
            return milestone
    return profile.current_streak + 1


def days_until_next_milestone(profile: UserProfile) -> int:
    return next_milestone(profile) - profile.current_streak


def format_streak_display(profile: UserProfile) -> str:
    """
    Format the streak for display

    Returns:
        Multi-line string with current, best and next milestone
    """
    if profile.current_streak == 0:
        return "No streak yet. Check in today to start one! 💪"

    line = f"🔥 {profile.current_streak} day streak"
    if profile.longest_streak > profile.current_streak:
        line += f" (best: {profile.longest_streak})"

    remaining = days_until_next_milestone(profile)
    day_word = "day" if remaining == 1 else "days"
    return f"{line}\n{remaining} {day_word} until your {next_milestone(profile)}-day milestone"

"""
Badge System

Unlocks achievement badges from profile and companion state.

Badges:
- First Check-In: at least one mood entry logged
- 3-Day Streak / 5-Day Streak: longest streak reached 3 / 5 days
- First Purchase: any accessory or background owned
- Dress Up: companion wears at least one accessory

Earning is one-way: a badge is never un-earned and its timestamp is
recorded once. Running the checks again after any event is always safe.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional
import logging

from moodlet.models.badge import Badge
from moodlet.models.companion import Companion
from moodlet.models.profile import UserProfile

logger = logging.getLogger(__name__)


@dataclass
class BadgeContext:
    """State a badge predicate may inspect"""
    profile: UserProfile
    companion: Optional[Companion] = None
    mood_entry_count: int = 0


def _first_mood(ctx: BadgeContext) -> bool:
    return ctx.mood_entry_count >= 1


def _streak_3_day(ctx: BadgeContext) -> bool:
    return ctx.profile.longest_streak >= 3


def _streak_5_day(ctx: BadgeContext) -> bool:
    return ctx.profile.longest_streak >= 5


def _first_purchase(ctx: BadgeContext) -> bool:
    return bool(ctx.profile.unlocked_accessory_ids or ctx.profile.unlocked_background_ids)


def _dress_up(ctx: BadgeContext) -> bool:
    return ctx.companion is not None and bool(ctx.companion.equipped_accessories)


BADGE_CRITERIA: Dict[Badge, Callable[[BadgeContext], bool]] = {
    Badge.FIRST_MOOD: _first_mood,
    Badge.STREAK_3_DAY: _streak_3_day,
    Badge.STREAK_5_DAY: _streak_5_day,
    Badge.FIRST_PURCHASE: _first_purchase,
    Badge.DRESS_UP: _dress_up,
}


def earn_badge(profile: UserProfile, badge: Badge, now: datetime) -> bool:
    """
    Record a badge as earned at `now`

    Returns:
        True if newly earned, False if it was already held (timestamp kept)
    """
    if profile.has_badge(badge):
        return False

    profile.unlocked_badge_ids[badge.value] = now
    logger.info(f"Profile {profile.id} unlocked badge: {badge.value} ({badge.display_name})")
    return True


def _evaluate(badges: List[Badge], ctx: BadgeContext, now: datetime) -> List[Badge]:
    newly_earned = []
    for badge in badges:
        if ctx.profile.has_badge(badge):
            continue
        if BADGE_CRITERIA[badge](ctx) and earn_badge(ctx.profile, badge, now):
            newly_earned.append(badge)
    return newly_earned


def check_and_award_badges(
    profile: UserProfile,
    now: datetime,
    companion: Optional[Companion] = None,
    mood_entry_count: int = 0
) -> List[Badge]:
    """
    Run every badge predicate and earn whatever is satisfied

    Call after any event that could satisfy a predicate (check-in, purchase,
    equip).

    Returns:
        Badges earned by this call, in Badge declaration order
    """
    ctx = BadgeContext(profile=profile, companion=companion, mood_entry_count=mood_entry_count)
    return _evaluate(list(Badge), ctx, now)


def check_first_mood_badge(profile: UserProfile, mood_entry_count: int, now: datetime) -> List[Badge]:
    ctx = BadgeContext(profile=profile, mood_entry_count=mood_entry_count)
    return _evaluate([Badge.FIRST_MOOD], ctx, now)


def check_streak_badges(profile: UserProfile, now: datetime) -> List[Badge]:
    return _evaluate([Badge.STREAK_3_DAY, Badge.STREAK_5_DAY], BadgeContext(profile=profile), now)


def check_purchase_badge(profile: UserProfile, now: datetime) -> List[Badge]:
    return _evaluate([Badge.FIRST_PURCHASE], BadgeContext(profile=profile), now)


def check_dress_up_badge(
    profile: UserProfile,
    companion: Optional[Companion],
    now: datetime
) -> List[Badge]:
    return _evaluate([Badge.DRESS_UP], BadgeContext(profile=profile, companion=companion), now)


def get_badge_progress(profile: UserProfile) -> Dict[str, any]:
    """
    Get earned and locked badges for display

    Returns:
        {
            'unlocked': [{'badge': str, 'name': str, 'description': str, 'icon': str, 'earned_at': datetime}],
            'locked': [{'badge': str, 'name': str, 'description': str, 'icon': str}],
            'total_unlocked': int,
            'total_badges': int
        }
    """
    unlocked = []
    locked = []

    for badge in Badge:
        info = {
            "badge": badge.value,
            "name": badge.display_name,
            "description": badge.description,
            "icon": badge.icon,
        }
        earned_at = profile.unlocked_badge_ids.get(badge.value)
        if earned_at is not None:
            info["earned_at"] = earned_at
            unlocked.append(info)
        else:
            locked.append(info)

    # Most recent first
    unlocked.sort(key=lambda x: x["earned_at"], reverse=True)

    return {
        "unlocked": unlocked,
        "locked": locked,
        "total_unlocked": len(unlocked),
        "total_badges": len(Badge),
    }

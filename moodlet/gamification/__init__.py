"""
Gamification engine for Moodlet

This module implements the engagement rules behind check-ins:
- Points ledger with a daily earning cap
- Daily streaks with a one-day grace period
- Badge unlocking
- Weekly review bonus
- Companion shop and equip slots

Every function here is synchronous and works on in-memory models; loading
and saving is the caller's job.
"""

from moodlet.gamification.points_system import (
    award_points,
    calculate_points_for_entry,
    can_earn_points,
    check_and_award_streak_bonus,
    spend_points,
)
from moodlet.gamification.streak_system import (
    days_until_next_milestone,
    is_streak_at_risk,
    next_milestone,
    streak_milestone_reached,
    update_streak,
)
from moodlet.gamification.badge_system import check_and_award_badges, earn_badge
from moodlet.gamification.weekly_review import (
    has_reviewed_week,
    mark_week_reviewed,
    unreviewed_week_start,
)
from moodlet.gamification.shop_system import (
    equip_accessory,
    equip_background,
    purchase,
    unequip_background,
    unequip_category,
)

__all__ = [
    "award_points",
    "calculate_points_for_entry",
    "can_earn_points",
    "check_and_award_streak_bonus",
    "spend_points",
    "update_streak",
    "is_streak_at_risk",
    "streak_milestone_reached",
    "next_milestone",
    "days_until_next_milestone",
    "check_and_award_badges",
    "earn_badge",
    "has_reviewed_week",
    "mark_week_reviewed",
    "unreviewed_week_start",
    "purchase",
    "equip_accessory",
    "equip_background",
    "unequip_category",
    "unequip_background",
]

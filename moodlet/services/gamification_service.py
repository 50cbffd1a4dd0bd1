"""
GamificationService - Engagement Business Logic

Connects UI events (check-in submitted, review opened, shop tapped) to the
synchronous gamification engine. Each operation loads the aggregates from
the ProfileStore, runs the engine, then saves. The store is never awaited
while a profile is mid-mutation.

This is also where the engine's call-site contracts are kept:
- The daily cap is checked before a point-earning entry is created
- The streak bonus is checked exactly once per streak update
- Badges are re-evaluated after every event that can unlock one
- Equip targets are checked for ownership before the engine equips them
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from moodlet.exceptions import MoodletError, OwnershipError, ValidationError, wrap_store_exception
from moodlet.gamification import badge_system, shop_system, streak_system, weekly_review
from moodlet.gamification.points_system import (
    award_points,
    can_earn_points,
    check_and_award_streak_bonus,
    points_for_entry,
    remaining_point_entries,
)
from moodlet.models.companion import Companion, CompanionSpecies, Pronouns
from moodlet.models.mood import Mood, MoodEntry
from moodlet.models.profile import UserProfile
from moodlet.models.shop import AccessoryCategory, ShopItem
from moodlet.services.store import ProfileStore
from moodlet.utils.datetime_helpers import Clock, SystemClock, start_of_week

logger = logging.getLogger(__name__)

ITEM_TYPES = ("accessory", "background")


class GamificationService:
    """
    Service for the engagement engine.

    Responsibilities:
    - Check-in processing (points, streak, milestone bonus, badges)
    - Weekly review flow
    - Shop purchases and companion equip state
    - Premium entitlement updates
    """

    def __init__(self, store: ProfileStore, clock: Optional[Clock] = None):
        """
        Initialize GamificationService.

        Args:
            store: ProfileStore implementation
            clock: Clock used for "now" (defaults to the wall clock)
        """
        self.store = store
        self.clock = clock or SystemClock()
        logger.debug("GamificationService initialized")

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def get_or_create_profile(self) -> UserProfile:
        """Load the profile, creating the default one on first use"""
        profile = await self.store.get_profile()
        if profile is None:
            profile = UserProfile()
            await self._save_profile(profile)
            logger.info(f"Created default profile {profile.id}")
        return profile

    async def create_companion(
        self,
        name: str,
        species: CompanionSpecies = CompanionSpecies.CAT,
        pronouns: Pronouns = Pronouns.THEY,
        base_color: str = "default"
    ) -> Companion:
        """
        Create the user's companion during onboarding

        Raises:
            ValidationError: If the name is blank or the species is not unlocked
        """
        if not name.strip():
            raise ValidationError(message="Companion name cannot be empty", field="name", value=name)

        profile = await self.get_or_create_profile()
        if species.is_premium and not (profile.is_premium or profile.has_unlocked_species(species)):
            raise ValidationError(
                message=f"Species '{species.value}' requires premium",
                field="species",
                value=species.value,
                profile_id=profile.id
            )

        companion = Companion(name=name.strip(), species=species, pronouns=pronouns, base_color=base_color)
        await self._save_companion(companion)
        logger.info(f"Created companion {companion.id} ({species.value}) for profile {profile.id}")
        return companion

    async def set_premium(self, is_premium: bool, expires_at: Optional[datetime] = None) -> UserProfile:
        """Apply an already-verified subscription entitlement"""
        profile = await self.get_or_create_profile()
        profile.is_premium = is_premium
        profile.premium_expiration_date = expires_at if is_premium else None
        await self._save_profile(profile)
        logger.info(f"Profile {profile.id} premium={is_premium}")
        return profile

    # ------------------------------------------------------------------
    # Check-ins
    # ------------------------------------------------------------------

    async def record_check_in(
        self,
        mood: Mood,
        note: Optional[str] = None,
        activity_tags: Iterable[str] = (),
        people_tags: Iterable[str] = (),
        emotion_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Process a submitted check-in.

        Args:
            mood: Selected mood
            note: Optional reflection text
            activity_tags: Activity context tags
            people_tags: People context tags
            emotion_id: Optional finer-grained emotion

        Returns:
            {
                'entry': MoodEntry,
                'points_awarded': int,  # check-in points, excluding streak bonus
                'points_capped': bool,  # daily cap reached, entry earned nothing
                'streak_bonus': int,
                'current_streak': int,
                'longest_streak': int,
                'milestone': Optional[int],
                'badges_unlocked': list[Badge],
                'total_points': int,
                'message': str
            }
        """
        now = self.clock.now()
        today = now.date()
        profile = await self.get_or_create_profile()

        today_entries = await self.store.get_mood_entries_for_day(today)
        earns = can_earn_points(today_entries, today)

        entry = MoodEntry(
            timestamp=now,
            mood=mood,
            emotion_id=emotion_id,
            note=note.strip() if note and note.strip() else None,
            activity_tags=set(activity_tags),
            people_tags=set(people_tags),
            earned_points=earns,
        )
        # The entry is appended only after the profile is saved
        entry_count = await self.store.count_mood_entries() + 1
        companion = await self.store.get_companion()

        points = 0
        if earns:
            points = points_for_entry(entry)
            award_points(profile, points, reason="check-in")

        streak_result = streak_system.update_streak(profile, today)
        streak_bonus = check_and_award_streak_bonus(profile)
        badges = badge_system.check_and_award_badges(
            profile, now, companion=companion, mood_entry_count=entry_count
        )

        await self._save_profile(profile)
        await self._add_mood_entry(entry, profile.id)

        result = {
            "entry": entry,
            "points_awarded": points,
            "points_capped": not earns,
            "streak_bonus": streak_bonus,
            "current_streak": profile.current_streak,
            "longest_streak": profile.longest_streak,
            "milestone": streak_result["milestone"],
            "badges_unlocked": badges,
            "total_points": profile.total_points,
            "message": self._build_check_in_message(points, earns, streak_result, streak_bonus, badges),
        }

        logger.info(
            f"Check-in processed for profile {profile.id}: "
            f"points={points}, bonus={streak_bonus}, streak={profile.current_streak}, "
            f"badges={len(badges)}"
        )
        return result

    def _build_check_in_message(
        self,
        points: int,
        earns: bool,
        streak_result: Dict[str, Any],
        streak_bonus: int,
        badges: list
    ) -> str:
        lines = []
        if earns:
            lines.append(f"+{points} points ⭐")
        else:
            lines.append("Check-in saved. You've earned all your points for today.")

        lines.append(streak_result["message"])

        if streak_bonus:
            lines.append(f"+{streak_bonus} streak bonus!")

        for badge in badges:
            lines.append(f"🏅 Badge unlocked: {badge.display_name}")

        return "\n".join(lines)

    async def get_streak_status(self) -> Dict[str, Any]:
        """Streak projections for the home screen and reminder messaging"""
        profile = await self.get_or_create_profile()
        today = self.clock.today()
        today_entries = await self.store.get_mood_entries_for_day(today)

        return {
            "current_streak": profile.current_streak,
            "longest_streak": profile.longest_streak,
            "at_risk": streak_system.is_streak_at_risk(profile, today),
            "next_milestone": streak_system.next_milestone(profile),
            "days_until_next_milestone": streak_system.days_until_next_milestone(profile),
            "point_check_ins_left_today": remaining_point_entries(today_entries, today),
            "display": streak_system.format_streak_display(profile),
        }

    # ------------------------------------------------------------------
    # Weekly reviews
    # ------------------------------------------------------------------

    async def get_pending_review(self) -> Optional[Dict[str, Any]]:
        """
        Summary of the week awaiting review

        Returns:
            summarize_week() result for the last completed week, or None
            when it is already reviewed
        """
        profile = await self.get_or_create_profile()
        week_start = weekly_review.unreviewed_week_start(profile, self.clock.today())
        if week_start is None:
            return None
        return await self._summarize(week_start)

    async def complete_review(self, week_start: Optional[date] = None) -> Dict[str, Any]:
        """
        Mark a week as reviewed

        Args:
            week_start: Week to review; defaults to the pending week

        Returns:
            {
                'reviewed': bool,  # False if nothing to review, already reviewed or not over yet
                'week_start': Optional[date],
                'points_awarded': int,
                'total_points': int,
                'message': str
            }
        """
        profile = await self.get_or_create_profile()
        today = self.clock.today()

        if week_start is None:
            week_start = weekly_review.unreviewed_week_start(profile, today)
        if week_start is None:
            return {
                "reviewed": False,
                "week_start": None,
                "points_awarded": 0,
                "total_points": profile.total_points,
                "message": "No weekly review waiting.",
            }

        if not weekly_review.is_week_complete(week_start, today):
            logger.debug(f"Profile {profile.id} tried to review unfinished week of {week_start}")
            return {
                "reviewed": False,
                "week_start": start_of_week(week_start),
                "points_awarded": 0,
                "total_points": profile.total_points,
                "message": "This week isn't over yet.",
            }

        points = weekly_review.mark_week_reviewed(profile, week_start)
        if points:
            await self._save_profile(profile)
            message = f"Week reviewed! +{points} points ⭐"
        else:
            message = "Already reviewed."

        return {
            "reviewed": points > 0,
            "week_start": start_of_week(week_start),
            "points_awarded": points,
            "total_points": profile.total_points,
            "message": message,
        }

    async def _summarize(self, week_start: date) -> Dict[str, Any]:
        start, end = weekly_review.week_date_range(week_start)
        entries = await self.store.get_mood_entries_between(start, end)
        previous = await self.store.get_mood_entries_between(start - timedelta(days=7), start - timedelta(days=1))
        return weekly_review.summarize_week(entries, start, previous)

    # ------------------------------------------------------------------
    # Shop
    # ------------------------------------------------------------------

    async def purchase_item(self, item_id: str, item_type: str) -> Dict[str, Any]:
        """
        Buy a catalog item

        Returns:
            {
                'success': bool,
                'reason': Optional[str],  # owned, locked, insufficient_points
                'points_needed': int,
                'total_points': int,
                'badges_unlocked': list[Badge],
                'message': str
            }

        Raises:
            ValidationError: Unknown item_type
            RecordNotFoundError: Unknown item id
        """
        item = await self._get_item(item_id, item_type)
        profile = await self.get_or_create_profile()
        outcome = shop_system.try_purchase(item, profile, self.clock.now())

        if outcome["success"]:
            await self._save_profile(profile)
            message = f"You bought {item.name}! 🛍️"
            for badge in outcome["badges_unlocked"]:
                message += f"\n🏅 Badge unlocked: {badge.display_name}"
        elif outcome["reason"] == "owned":
            message = "You already own this item."
        elif outcome["reason"] == "locked":
            message = "This item is locked."
        else:
            message = f"You need {shop_system.points_needed(item, profile)} more points"

        return {
            "success": outcome["success"],
            "reason": outcome["reason"],
            "points_needed": 0 if outcome["success"] else shop_system.points_needed(item, profile),
            "total_points": profile.total_points,
            "badges_unlocked": outcome["badges_unlocked"],
            "message": message,
        }

    async def equip_item(self, item_id: str, item_type: str) -> Dict[str, Any]:
        """
        Equip an owned item on the companion

        Without a companion this is a no-op.

        Raises:
            OwnershipError: The profile does not own the item
        """
        item = await self._get_item(item_id, item_type)
        profile = await self.get_or_create_profile()

        if not shop_system.is_owned(item, profile):
            raise OwnershipError(
                message=f"Profile does not own {item_type} {item_id}",
                item_id=item_id,
                profile_id=profile.id,
                operation="equip_item"
            )

        companion = await self.store.get_companion()
        if companion is None:
            logger.debug("equip_item called without a companion, ignoring")
            return {"equipped": False, "replaced": None, "badges_unlocked": []}

        if item_type == "accessory":
            replaced = shop_system.equip_accessory(companion, item)
        else:
            replaced = shop_system.equip_background(companion, item)

        badges = badge_system.check_dress_up_badge(profile, companion, self.clock.now())

        await self._save_companion(companion)
        await self._save_profile(profile)

        return {"equipped": True, "replaced": replaced, "badges_unlocked": badges}

    async def unequip_category(self, category: AccessoryCategory) -> Optional[str]:
        """Clear an accessory slot. Returns the removed id."""
        companion = await self.store.get_companion()
        if companion is None:
            return None
        removed = shop_system.unequip_category(companion, category)
        await self._save_companion(companion)
        return removed

    async def unequip_background(self) -> Optional[str]:
        companion = await self.store.get_companion()
        if companion is None:
            return None
        removed = shop_system.unequip_background(companion)
        await self._save_companion(companion)
        return removed

    async def _get_item(self, item_id: str, item_type: str) -> ShopItem:
        if item_type == "accessory":
            return await self.store.get_accessory(item_id)
        if item_type == "background":
            return await self.store.get_background(item_id)
        raise ValidationError(
            message=f"item_type must be one of {ITEM_TYPES}",
            field="item_type",
            value=item_type
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def _save_profile(self, profile: UserProfile) -> None:
        try:
            await self.store.save_profile(profile)
        except MoodletError:
            raise
        except Exception as e:
            raise wrap_store_exception(e, operation="save_profile", profile_id=profile.id) from e

    async def _save_companion(self, companion: Companion) -> None:
        try:
            await self.store.save_companion(companion)
        except MoodletError:
            raise
        except Exception as e:
            raise wrap_store_exception(e, operation="save_companion") from e

    async def _add_mood_entry(self, entry: MoodEntry, profile_id: str) -> None:
        try:
            await self.store.add_mood_entry(entry)
        except MoodletError:
            raise
        except Exception as e:
            raise wrap_store_exception(e, operation="add_mood_entry", profile_id=profile_id) from e

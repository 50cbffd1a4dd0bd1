"""
Shop Economy

Purchases of cosmetic items and the companion's equip slots.

Purchase rules:
- Already-owned items cannot be bought again
- Premium-only items need an active premium entitlement
- Items with a streak milestone need a longest streak at least that long
- The balance must cover the price; nothing is charged on failure
- Purchases are final

Equip rules:
- One accessory per category; equipping replaces the current one
- One background, independent of accessories
- Ownership is NOT checked here: callers validate before equipping
"""

from datetime import datetime
from typing import Dict, List, Optional
import logging

from moodlet.gamification.badge_system import check_purchase_badge
from moodlet.gamification.points_system import spend_points
from moodlet.models.badge import Badge
from moodlet.models.companion import Companion
from moodlet.models.profile import UserProfile
from moodlet.models.shop import Accessory, AccessoryCategory, Background, ShopItem

logger = logging.getLogger(__name__)


def is_owned(item: ShopItem, profile: UserProfile) -> bool:
    if isinstance(item, Accessory):
        return profile.has_unlocked_accessory(item.id)
    return profile.has_unlocked_background(item.id)


def is_locked(item: ShopItem, profile: UserProfile) -> bool:
    """Item is gated by premium or streak requirements the profile does not meet"""
    if item.is_premium_only and not profile.is_premium:
        return True
    if item.required_streak_milestone is not None:
        return profile.longest_streak < item.required_streak_milestone
    return False


def can_afford(item: ShopItem, profile: UserProfile) -> bool:
    return profile.total_points >= item.price


def points_needed(item: ShopItem, profile: UserProfile) -> int:
    """Points still missing to buy the item (0 if affordable)"""
    return max(0, item.price - profile.total_points)


def try_purchase(item: ShopItem, profile: UserProfile, now: datetime) -> Dict[str, any]:
    """
    Buy an item with points, reporting why a purchase failed

    Args:
        item: Accessory or Background to buy
        profile: Buyer
        now: Timestamp for a first-purchase badge

    Returns:
        {
            'success': bool,
            'reason': Optional[str],  # owned, locked, insufficient_points
            'badges_unlocked': list[Badge]
        }
        Nothing changes on the profile when success is False.
    """
    if is_owned(item, profile):
        logger.debug(f"Profile {profile.id} already owns {item.id}")
        return _purchase_result(False, "owned")

    if is_locked(item, profile):
        logger.debug(f"Profile {profile.id} cannot buy locked item {item.id}")
        return _purchase_result(False, "locked")

    if not spend_points(profile, item.price):
        return _purchase_result(False, "insufficient_points")

    if isinstance(item, Accessory):
        profile.unlocked_accessory_ids.add(item.id)
    else:
        profile.unlocked_background_ids.add(item.id)

    logger.info(f"Profile {profile.id} purchased {item.name} ({item.id}) for {item.price} points")

    return _purchase_result(True, None, check_purchase_badge(profile, now))


def _purchase_result(success: bool, reason: Optional[str], badges: Optional[List[Badge]] = None) -> Dict[str, any]:
    return {"success": success, "reason": reason, "badges_unlocked": badges or []}


def purchase(item: ShopItem, profile: UserProfile, now: datetime) -> bool:
    """
    Buy an item with points

    Returns:
        True if bought; False (and no change) if owned, locked or unaffordable
    """
    return try_purchase(item, profile, now)["success"]


def equip_accessory(companion: Companion, accessory: Accessory) -> Optional[str]:
    """
    Wear an accessory, replacing any accessory of the same category

    Returns:
        Id of the accessory taken off, if any
    """
    previous = companion.equipped_accessories.get(accessory.category)
    companion.equipped_accessories[accessory.category] = accessory.id
    logger.debug(f"Companion {companion.id} equipped {accessory.id} in {accessory.category.value}")
    if previous == accessory.id:
        return None
    return previous


def unequip_category(companion: Companion, category: AccessoryCategory) -> Optional[str]:
    """Take off whatever is worn in a category. Returns the removed id."""
    return companion.equipped_accessories.pop(category, None)


def unequip_accessory(companion: Companion, accessory_id: str) -> bool:
    """Take off a specific accessory if it is worn"""
    for category, equipped_id in list(companion.equipped_accessories.items()):
        if equipped_id == accessory_id:
            del companion.equipped_accessories[category]
            return True
    return False


def equip_background(companion: Companion, background: Background) -> Optional[str]:
    """Set the background. Returns the id it replaced, if any."""
    previous = companion.equipped_background_id
    companion.equipped_background_id = background.id
    if previous == background.id:
        return None
    return previous


def unequip_background(companion: Companion) -> Optional[str]:
    previous = companion.equipped_background_id
    companion.equipped_background_id = None
    return previous


def is_equipped(item: ShopItem, companion: Companion) -> bool:
    if isinstance(item, Accessory):
        return companion.equipped_accessories.get(item.category) == item.id
    return companion.equipped_background_id == item.id


def equipped_accessories_in_layer_order(companion: Companion) -> List[str]:
    """Equipped accessory ids, back layer first"""
    return [
        companion.equipped_accessories[category]
        for category in sorted(companion.equipped_accessories, key=lambda c: c.layer_order)
    ]

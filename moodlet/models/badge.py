"""Badge models for gamification"""
from enum import Enum


class Badge(str, Enum):
    """Achievement badges. The set is closed; each has one unlock predicate."""
    FIRST_MOOD = "first_mood"
    STREAK_3_DAY = "streak_3_day"
    STREAK_5_DAY = "streak_5_day"
    FIRST_PURCHASE = "first_purchase"
    DRESS_UP = "dress_up"

    @property
    def display_name(self) -> str:
        return _BADGE_INFO[self][0]

    @property
    def description(self) -> str:
        return _BADGE_INFO[self][1]

    @property
    def icon(self) -> str:
        return _BADGE_INFO[self][2]


# badge -> (display name, description, icon)
_BADGE_INFO = {
    Badge.FIRST_MOOD: ("First Check-In", "Log your first mood", "heart.fill"),
    Badge.STREAK_3_DAY: ("3-Day Streak", "Maintain a 3-day streak", "flame.fill"),
    Badge.STREAK_5_DAY: ("5-Day Streak", "Maintain a 5-day streak", "flame.fill"),
    Badge.FIRST_PURCHASE: ("First Purchase", "Buy your first item from the shop", "bag.fill"),
    Badge.DRESS_UP: ("Dress Up", "Equip an accessory to your Moodlet", "tshirt.fill"),
}

"""Pydantic models for profiles, mood entries, companions and the shop catalog"""
from moodlet.models.badge import Badge
from moodlet.models.companion import Companion, CompanionSpecies, Pronouns
from moodlet.models.mood import Mood, MoodEntry
from moodlet.models.profile import UserProfile
from moodlet.models.shop import Accessory, AccessoryCategory, Background, CatalogItem, ShopItem

__all__ = [
    "Accessory",
    "AccessoryCategory",
    "Background",
    "Badge",
    "CatalogItem",
    "Companion",
    "CompanionSpecies",
    "Mood",
    "MoodEntry",
    "Pronouns",
    "ShopItem",
    "UserProfile",
]

"""User profile model"""
from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from moodlet.models.badge import Badge
from moodlet.models.companion import CompanionSpecies


class UserProfile(BaseModel):
    """
    The single mutable aggregate the engine writes

    Invariants kept by the gamification functions:
    - current_streak <= longest_streak after every update
    - streak_grace_used is False whenever a streak restarts at 1
    - total_points never goes negative
    """
    id: str = Field(default_factory=lambda: str(uuid4()))

    # Points
    total_points: int = Field(default=0, ge=0)

    # Streaks
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_log_date: Optional[date] = None
    streak_grace_used: bool = False
    last_streak_milestone_paid: Optional[int] = None  # bonus already paid for this streak

    # Unlocks
    unlocked_badge_ids: dict[str, datetime] = Field(default_factory=dict)
    unlocked_accessory_ids: set[str] = Field(default_factory=set)
    unlocked_background_ids: set[str] = Field(default_factory=set)
    unlocked_species: list[str] = Field(default_factory=lambda: [CompanionSpecies.CAT.value])

    # Weekly reviews, keyed by the first day of each week
    reviewed_week_starts: set[date] = Field(default_factory=set)

    # Subscription entitlement, resolved outside the engine
    is_premium: bool = False
    premium_expiration_date: Optional[datetime] = None

    onboarding_completed: bool = False

    def has_badge(self, badge: Badge) -> bool:
        return badge.value in self.unlocked_badge_ids

    def has_unlocked_accessory(self, accessory_id: str) -> bool:
        return accessory_id in self.unlocked_accessory_ids

    def has_unlocked_background(self, background_id: str) -> bool:
        return background_id in self.unlocked_background_ids

    def has_unlocked_species(self, species: CompanionSpecies) -> bool:
        return species.value in self.unlocked_species

"""Unit tests for Pydantic models"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from moodlet.models import (
    Accessory,
    AccessoryCategory,
    Background,
    Badge,
    Companion,
    CompanionSpecies,
    Mood,
    MoodEntry,
    UserProfile,
)


def test_user_profile_defaults():
    """Test a new profile starts empty with the cat unlocked"""
    profile = UserProfile()

    assert profile.total_points == 0
    assert profile.current_streak == 0
    assert profile.longest_streak == 0
    assert profile.last_log_date is None
    assert profile.streak_grace_used is False
    assert profile.unlocked_species == ["cat"]
    assert profile.has_unlocked_species(CompanionSpecies.CAT)
    assert not profile.has_unlocked_species(CompanionSpecies.FOX)


def test_user_profile_rejects_negative_points():
    with pytest.raises(ValidationError):
        UserProfile(total_points=-1)


def test_user_profile_has_badge():
    profile = UserProfile(unlocked_badge_ids={"first_mood": datetime(2024, 1, 1, tzinfo=timezone.utc)})

    assert profile.has_badge(Badge.FIRST_MOOD)
    assert not profile.has_badge(Badge.DRESS_UP)


def test_mood_ordering():
    assert Mood.SAD < Mood.NEUTRAL < Mood.HAPPY
    assert Mood(4) is Mood.CONTENT
    assert Mood.ANNOYED.display_name == "Annoyed"


def test_mood_entry_reflection_and_tags():
    """Test blank notes are not reflections"""
    now = datetime(2024, 1, 17, tzinfo=timezone.utc)

    assert MoodEntry(timestamp=now, mood=Mood.HAPPY, note="  ").has_reflection is False
    assert MoodEntry(timestamp=now, mood=Mood.HAPPY, note="ok").has_reflection is True
    assert MoodEntry(timestamp=now, mood=Mood.HAPPY).has_context_tags is False
    assert MoodEntry(timestamp=now, mood=Mood.HAPPY, people_tags={"mom"}).has_context_tags is True


def test_mood_entry_ids_unique():
    now = datetime(2024, 1, 17, tzinfo=timezone.utc)

    assert MoodEntry(timestamp=now, mood=Mood.SAD).id != MoodEntry(timestamp=now, mood=Mood.SAD).id


def test_badge_metadata():
    assert Badge.STREAK_3_DAY.display_name == "3-Day Streak"
    assert Badge.FIRST_PURCHASE.icon == "bag.fill"
    assert all(badge.description for badge in Badge)


def test_accessory_category_layer_order():
    """Test categories render eyes first and held items last"""
    ordered = sorted(AccessoryCategory, key=lambda c: c.layer_order)

    assert ordered == [
        AccessoryCategory.EYES,
        AccessoryCategory.TOP,
        AccessoryCategory.GLASSES,
        AccessoryCategory.HAT,
        AccessoryCategory.HELD_ITEM,
    ]


def test_catalog_item_price_must_be_positive():
    with pytest.raises(ValidationError):
        Background(id="free", name="Free", image_name="free", price=0)


def test_catalog_item_milestone_must_be_positive():
    with pytest.raises(ValidationError):
        Accessory(
            id="bad", name="Bad", image_name="bad",
            category=AccessoryCategory.HAT, price=5, required_streak_milestone=0
        )


def test_species_premium():
    assert CompanionSpecies.CAT.is_premium is False
    assert all(s.is_premium for s in CompanionSpecies if s is not CompanionSpecies.CAT)


def test_companion_defaults():
    companion = Companion(name="Miso")

    assert companion.species == CompanionSpecies.CAT
    assert companion.equipped_accessories == {}
    assert companion.equipped_background_id is None
    assert companion.created_at.tzinfo is not None

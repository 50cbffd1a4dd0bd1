"""Global test fixtures and utilities for moodlet tests"""
import pytest
from datetime import datetime, timezone

from moodlet.models import (
    Accessory,
    AccessoryCategory,
    Background,
    Companion,
    Mood,
    MoodEntry,
    UserProfile,
)
from moodlet.services.gamification_service import GamificationService
from moodlet.services.store import InMemoryProfileStore
from moodlet.utils.datetime_helpers import FixedClock


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def now():
    """Wednesday 2024-01-17 10:00 UTC"""
    return datetime(2024, 1, 17, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(now):
    return now.date()


@pytest.fixture
def clock(now):
    return FixedClock(now)


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def profile():
    """Fresh default profile"""
    return UserProfile()


@pytest.fixture
def companion():
    return Companion(name="Miso")


@pytest.fixture
def party_hat():
    return Accessory(id="party_hat", name="Party Hat", image_name="party_hat", category=AccessoryCategory.HAT, price=10)


@pytest.fixture
def pizza_hat():
    return Accessory(id="pizza", name="Pizza Hat", image_name="pizza", category=AccessoryCategory.HAT, price=20)


@pytest.fixture
def cool_glasses():
    return Accessory(
        id="cool_glasses", name="Cool Glasses", image_name="cool_glasses",
        category=AccessoryCategory.GLASSES, price=8
    )


@pytest.fixture
def cozy_room():
    return Background(id="cozy_room", name="Cozy Room", image_name="cozy_room", price=25)


@pytest.fixture
def make_entry():
    """Factory for mood entries"""
    def _make(timestamp, earned_points=True, mood=Mood.CONTENT, **kwargs):
        return MoodEntry(timestamp=timestamp, mood=mood, earned_points=earned_points, **kwargs)
    return _make


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
async def store(party_hat, pizza_hat, cool_glasses, cozy_room):
    """In-memory store seeded with a small catalog"""
    store = InMemoryProfileStore()
    await store.add_catalog_items([party_hat, pizza_hat, cool_glasses, cozy_room])
    return store


@pytest.fixture
async def service(store, clock):
    return GamificationService(store, clock)

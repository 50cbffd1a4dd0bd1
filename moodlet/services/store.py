"""
Profile Store

The engine does not implement persistence. ProfileStore is the interface a
host provides (SQL, on-device database, ...). InMemoryProfileStore is the
reference implementation used by tests and local tooling.

Records are copied on the way in and out, so a loaded profile only changes
in the store once it is saved.
"""

from datetime import date
from typing import Iterable, List, Optional, Protocol
import logging

from moodlet.exceptions import RecordNotFoundError
from moodlet.models.companion import Companion
from moodlet.models.mood import MoodEntry
from moodlet.models.profile import UserProfile
from moodlet.models.shop import Accessory, Background, ShopItem
from moodlet.utils.datetime_helpers import to_day

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Persistence operations the engine's callers rely on"""

    async def get_profile(self) -> Optional[UserProfile]:
        ...

    async def save_profile(self, profile: UserProfile) -> None:
        ...

    async def get_companion(self) -> Optional[Companion]:
        ...

    async def save_companion(self, companion: Companion) -> None:
        ...

    async def add_mood_entry(self, entry: MoodEntry) -> None:
        ...

    async def get_mood_entries_for_day(self, day: date) -> List[MoodEntry]:
        ...

    async def get_mood_entries_between(self, start: date, end: date) -> List[MoodEntry]:
        ...

    async def count_mood_entries(self) -> int:
        ...

    async def get_accessory(self, accessory_id: str) -> Accessory:
        ...

    async def get_background(self, background_id: str) -> Background:
        ...

    async def add_catalog_items(self, items: Iterable[ShopItem]) -> int:
        ...


class InMemoryProfileStore:
    """In-memory ProfileStore (not persisted)"""

    def __init__(self):
        self._profile: Optional[UserProfile] = None
        self._companion: Optional[Companion] = None
        self._entries: List[MoodEntry] = []
        self._accessories: dict[str, Accessory] = {}
        self._backgrounds: dict[str, Background] = {}

    async def get_profile(self) -> Optional[UserProfile]:
        if self._profile is None:
            return None
        return self._profile.model_copy(deep=True)

    async def save_profile(self, profile: UserProfile) -> None:
        self._profile = profile.model_copy(deep=True)
        logger.debug(f"Saved profile {profile.id}")

    async def get_companion(self) -> Optional[Companion]:
        if self._companion is None:
            return None
        return self._companion.model_copy(deep=True)

    async def save_companion(self, companion: Companion) -> None:
        self._companion = companion.model_copy(deep=True)
        logger.debug(f"Saved companion {companion.id}")

    async def add_mood_entry(self, entry: MoodEntry) -> None:
        self._entries.append(entry.model_copy(deep=True))

    async def get_mood_entries_for_day(self, day: date) -> List[MoodEntry]:
        return await self.get_mood_entries_between(day, day)

    async def get_mood_entries_between(self, start: date, end: date) -> List[MoodEntry]:
        """Entries with start <= day <= end, oldest first"""
        matching = [e for e in self._entries if start <= to_day(e.timestamp) <= end]
        matching.sort(key=lambda e: e.timestamp)
        return [e.model_copy(deep=True) for e in matching]

    async def count_mood_entries(self) -> int:
        return len(self._entries)

    async def get_accessory(self, accessory_id: str) -> Accessory:
        accessory = self._accessories.get(accessory_id)
        if accessory is None:
            raise RecordNotFoundError(
                message=f"Accessory {accessory_id} not in catalog",
                record_type="Accessory",
                record_id=accessory_id
            )
        return accessory

    async def get_background(self, background_id: str) -> Background:
        background = self._backgrounds.get(background_id)
        if background is None:
            raise RecordNotFoundError(
                message=f"Background {background_id} not in catalog",
                record_type="Background",
                record_id=background_id
            )
        return background

    async def add_catalog_items(self, items: Iterable[ShopItem]) -> int:
        """
        Add catalog items that are not present yet

        Existing items are never replaced or removed.

        Returns:
            Number of items added
        """
        added = 0
        for item in items:
            target = self._accessories if isinstance(item, Accessory) else self._backgrounds
            if item.id in target:
                continue
            target[item.id] = item
            added += 1
            logger.info(f"Catalog: added {type(item).__name__.lower()} '{item.name}'")
        return added

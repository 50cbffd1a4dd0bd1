"""Companion models"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from moodlet.models.shop import AccessoryCategory


class CompanionSpecies(str, Enum):
    CAT = "cat"
    BEAR = "bear"
    BUNNY = "bunny"
    FROG = "frog"
    FOX = "fox"
    PENGUIN = "penguin"

    @property
    def is_premium(self) -> bool:
        return self is not CompanionSpecies.CAT


class Pronouns(str, Enum):
    THEY = "they"
    SHE = "she"
    HE = "he"


class Companion(BaseModel):
    """
    The user's virtual companion

    Equip state holds catalog ids, not copies of the items.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    species: CompanionSpecies = CompanionSpecies.CAT
    pronouns: Pronouns = Pronouns.THEY
    base_color: str = "default"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    equipped_accessories: dict[AccessoryCategory, str] = Field(default_factory=dict)
    equipped_background_id: Optional[str] = None

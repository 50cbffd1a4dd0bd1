"""Mood entry models"""
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class Mood(int, Enum):
    """Mood scale, ordered from lowest (1) to highest (5)"""
    SAD = 1
    ANNOYED = 2
    NEUTRAL = 3
    CONTENT = 4
    HAPPY = 5

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class MoodEntry(BaseModel):
    """
    One emotional check-in

    Immutable once created except for earned_points. The engine only reads
    entries to derive counts; deleting them is owned by the store.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime
    mood: Mood
    emotion_id: Optional[str] = None  # finer-grained emotion picked in the check-in sheet
    note: Optional[str] = None
    activity_tags: set[str] = Field(default_factory=set)
    people_tags: set[str] = Field(default_factory=set)
    earned_points: bool = False

    @property
    def has_reflection(self) -> bool:
        return bool(self.note and self.note.strip())

    @property
    def has_context_tags(self) -> bool:
        return bool(self.activity_tags or self.people_tags)

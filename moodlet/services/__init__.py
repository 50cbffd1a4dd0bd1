"""
Services Layer

Call-site orchestration around the gamification engine.
"""

from moodlet.services.container import ServiceContainer, get_container, init_container
from moodlet.services.gamification_service import GamificationService
from moodlet.services.store import InMemoryProfileStore, ProfileStore

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "GamificationService",
    "InMemoryProfileStore",
    "ProfileStore",
]

"""
Service Container - Dependency Injection Container

Holds the host's ProfileStore and Clock and hands out services built on
them. Services are created on first access.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from moodlet.services.store import ProfileStore
from moodlet.utils.datetime_helpers import Clock, SystemClock

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    The store is injected by the host; the clock defaults to the wall clock.
    """

    store: ProfileStore
    clock: Clock = field(default_factory=SystemClock)

    _gamification_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def gamification_service(self):
        """Get GamificationService instance (lazy-loaded)"""
        if self._gamification_service is None:
            from moodlet.services.gamification_service import GamificationService
            self._gamification_service = GamificationService(self.store, self.clock)
            logger.debug("GamificationService instantiated")
        return self._gamification_service


# Global container instance (initialized by the host at startup)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() at startup before using services."
        )
    return _container


def init_container(store: ProfileStore, clock: Optional[Clock] = None) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        store: ProfileStore implementation
        clock: Optional clock (defaults to SystemClock)

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    if clock is None:
        _container = ServiceContainer(store=store)
    else:
        _container = ServiceContainer(store=store, clock=clock)

    logger.info("Service container initialized")
    return _container


def reset_container() -> None:
    """Drop the global container (used by tests)"""
    global _container
    _container = None

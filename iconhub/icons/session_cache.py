# iconhub/icons/session_cache.py
from __future__ import annotations
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

__all__ = ["SessionCache"]

T = TypeVar("T")



class SessionCache(Generic[T]):
    """
    Holds at most one value for the lifetime of its owner (request, build
    process or dev server, depending on where the instance lives).

    getOrPopulate() runs the factory on first use only. There is no lock:
    two overlapping first calls may both run the factory; the later result
    wins, which is harmless because the factory is deterministic.
    There is no expiry either. Hosts that want fresh data call evict().
    """
    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._value: T | None = None
        self._populated = False

    @property
    def populated(self) -> bool:
        return self._populated

    def peek(self) -> T | None:
        return self._value

    async def getOrPopulate(self, factory: Callable[[], Awaitable[T]]) -> T:
        if self._populated:
            return self._value  # type: ignore[return-value]

        value = await factory()
        self._value = value
        self._populated = True
        logger.debug("Session cache '%s' populated", self.name)
        return value

    def evict(self) -> None:
        if self._populated:
            logger.debug("Session cache '%s' evicted", self.name)
        self._value = None
        self._populated = False

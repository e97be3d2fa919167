"""
Slug Availability

Debounced lookup of whether a tenant slug is still free.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Set

import structlog

from ..api.errors import PortalAPIError
from .validators import MIN_SLUG_LENGTH

logger = structlog.get_logger(__name__)


class DebounceTimer:
    """
    A cancellable delayed call on the running event loop.

    Scheduling again before the delay has passed cancels the pending
    call and restarts the wait, so only the last call in a burst runs.
    """

    def __init__(self, delay: float):
        """
        Initialize the timer.

        Args:
            delay: Quiet period in seconds
        """
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        """Whether a call is waiting to fire."""
        return self._handle is not None

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """
        Cancel any pending call and schedule a new one.

        Must be called while an event loop is running.

        Args:
            callback: Function to call after the delay
            *args: Arguments for the callback
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def wait(self) -> None:
        """Wait until no call is pending (fired or cancelled)."""
        loop = asyncio.get_running_loop()
        while self._handle is not None:
            await asyncio.sleep(max(self._handle.when() - loop.time(), 0))

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        callback(*args)


class SlugAvailabilityChecker:
    """
    Tracks whether the current slug is available.

    The result is tri-state: None (unchecked, too short, or the lookup
    failed), True (free) or False (taken). Lookups that are already in
    flight are not cancelled when the slug changes, so a slow response
    for an older slug can land after a newer one.
    """

    def __init__(
        self,
        lookup: Callable[[str], Awaitable[bool]],
        debounce_seconds: float = 0.5,
    ):
        """
        Initialize the checker.

        Args:
            lookup: Coroutine function returning True if a slug is free
            debounce_seconds: Quiet period before a lookup is sent
        """
        self.lookup = lookup
        self.available: Optional[bool] = None
        self.checked_slug: Optional[str] = None
        self._timer = DebounceTimer(debounce_seconds)
        self._tasks: Set[asyncio.Task] = set()

    @property
    def checking(self) -> bool:
        """Whether a lookup is scheduled or in flight."""
        return self._timer.pending or bool(self._tasks)

    def request(self, slug: str) -> None:
        """
        Note a new slug value and (re)start the debounce wait.

        Slugs shorter than the minimum length never trigger a lookup.

        Args:
            slug: The slug as currently entered
        """
        self.available = None
        self.checked_slug = None
        if not slug or len(slug) < MIN_SLUG_LENGTH:
            self._timer.cancel()
            return
        self._timer.schedule(self._start_lookup, slug)

    def reset(self) -> None:
        """Forget the result and drop any pending lookup."""
        self._timer.cancel()
        self.available = None
        self.checked_slug = None

    async def wait(self) -> None:
        """Wait for the pending debounce and every in-flight lookup."""
        await self._timer.wait()
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _start_lookup(self, slug: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run_lookup(slug))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_lookup(self, slug: str) -> None:
        try:
            available = await self.lookup(slug)
        except PortalAPIError as e:
            logger.warning("slug_check_failed", slug=slug, error=e.message)
            self.available = None
            self.checked_slug = slug
            return

        logger.info("slug_checked", slug=slug, available=available)
        self.available = available
        self.checked_slug = slug

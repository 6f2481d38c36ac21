"""
Inactivity auto-lock for the wallet session
"""

import asyncio
import logging
import time
from typing import Any, Optional, Union

from .config import validate_lock_timeout
from .exceptions import LockSinkFailure
from .interfaces import LifecycleSource, LockSink, Scheduler, Unsubscribe
from .models import AppState, LockState

logger = logging.getLogger(__name__)


class SessionLockCoordinator:
    """
    Locks the wallet after it has spent ``timeout`` ms in the background.

    The coordinator owns the lock state and the timer handle; nothing else
    mutates them. All calls are expected on one event loop, so no locking is
    needed. Timeouts of 0 or less disable auto-lock. Arming a timer needs an
    injected scheduler or a running asyncio loop.

    Example:
        >>> coordinator = SessionLockCoordinator(30000, show_lock_screen, app_state)
        >>> coordinator.start()
        >>> ...
        >>> coordinator.dispose()
    """

    def __init__(
        self,
        timeout: Any,
        lock_sink: LockSink,
        lifecycle_source: Optional[LifecycleSource] = None,
        scheduler: Optional[Scheduler] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize the coordinator.

        Args:
            timeout: Auto-lock delay in milliseconds
            lock_sink: Called with no arguments to present the lock screen
            lifecycle_source: Optional source of app state changes, subscribed by start()
            scheduler: Anything with call_later()/time(); defaults to the running loop
            log: Logger for sink failures (default: module logger)

        Raises:
            InvalidConfig: If the timeout is not numeric
        """
        self.timeout = validate_lock_timeout(timeout)
        self.lock_sink = lock_sink
        self.lifecycle_source = lifecycle_source
        self.log = log or logger
        self.state = LockState.UNLOCKED
        self.last_background_at: Optional[float] = None
        self._scheduler = scheduler
        self._timer = None
        self._app_state: Optional[AppState] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def backgrounded(self) -> bool:
        return self.last_background_at is not None

    @property
    def timer_armed(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Subscribe to the lifecycle source."""
        if self._disposed or self._unsubscribe is not None:
            return
        if self.lifecycle_source is not None:
            self._unsubscribe = self.lifecycle_source.subscribe(self.handle_app_state)
        logger.debug(f"Lock coordinator started with timeout {self.timeout}ms")

    def handle_app_state(self, app_state: Union[AppState, str]) -> None:
        """
        React to a lifecycle signal.

        Any state other than ACTIVE counts as backgrounded. Repeated
        identical states are ignored.
        """
        if self._disposed:
            return
        try:
            next_state = AppState(app_state)
        except ValueError:
            self.log.warning(f"Ignoring unknown app state {app_state!r}")
            return
        previous, self._app_state = self._app_state, next_state
        if next_state == AppState.ACTIVE:
            if previous is not None and previous != AppState.ACTIVE:
                self.on_foreground()
        elif previous is None or previous == AppState.ACTIVE:
            try:
                self.on_background()
            except RuntimeError as e:
                # no scheduler injected and no running loop to arm on
                self.log.error(f"Cannot arm lock timer: {e}")

    def on_background(self) -> None:
        """Arm the lock timer unless one is already armed."""
        if self._disposed:
            return
        if self.last_background_at is None:
            self.last_background_at = self._now()
        if self.timeout <= 0 or self._timer is not None:
            return
        if self.state == LockState.LOCKED:
            return
        self._arm()

    def on_foreground(self) -> None:
        """Cancel a pending lock. Never unlocks an already locked session."""
        if self._disposed:
            return
        self._cancel()
        self.last_background_at = None

    def update_timeout(self, timeout: Any) -> None:
        """
        Change the auto-lock delay.

        If the session is backgrounded and still unlocked, the running
        countdown is replaced by one under the new timeout, measured from now.

        Raises:
            InvalidConfig: If the timeout is not numeric; the previous value is kept
        """
        new_timeout = validate_lock_timeout(timeout)
        if self._disposed:
            return
        self.timeout = new_timeout
        logger.debug(f"Lock timeout updated to {new_timeout}ms")
        if self.backgrounded and self.state == LockState.UNLOCKED:
            self._cancel()
            if new_timeout > 0:
                self._arm()

    def lock_now(self) -> None:
        """
        Lock immediately and present the lock screen.

        Raises:
            LockSinkFailure: If the lock sink raised; the session stays locked
        """
        if self._disposed:
            return
        self._cancel()
        self._lock()

    def mark_unlocked(self) -> None:
        """Record a successful unlock by the authentication flow."""
        if self._disposed:
            return
        if self.state == LockState.LOCKED:
            logger.info("Wallet unlocked")
        self.state = LockState.UNLOCKED

    def dispose(self) -> None:
        """Cancel the timer and release the lifecycle subscription."""
        if self._disposed:
            return
        self._disposed = True
        self._cancel()
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        logger.debug("Lock coordinator disposed")

    def _now(self) -> float:
        # asyncio loops read the same monotonic clock
        if self._scheduler is not None:
            return self._scheduler.time()
        return time.monotonic()

    def _get_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    def _arm(self) -> None:
        timer = None

        def fire():
            self._on_timeout(timer)

        timer = self._get_scheduler().call_later(self.timeout / 1000, fire)
        self._timer = timer
        logger.debug(f"Lock timer armed for {self.timeout}ms")

    def _cancel(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _on_timeout(self, timer) -> None:
        if self._disposed or timer is None or timer is not self._timer:
            return
        self._timer = None
        self._lock()

    def _lock(self) -> None:
        self.state = LockState.LOCKED
        logger.info("Locking wallet")
        try:
            self.lock_sink()
        except Exception as e:
            self.log.error(f"Failed to present lock screen: {e}", exc_info=True)
            raise LockSinkFailure(f"Failed to present lock screen: {e}") from e

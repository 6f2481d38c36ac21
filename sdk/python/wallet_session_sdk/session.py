"""
Wallet home-screen session
"""

import logging
from contextlib import ExitStack
from typing import Any, List, Mapping, Optional, Union

from .assets import aggregate
from .config import SessionSettings
from .deeplinks import DeepLinkRouter
from .exceptions import InvalidConfig
from .interfaces import (
    DeepLinkSource,
    DestinationResolver,
    LifecycleSource,
    LockSink,
    Scheduler,
    StateSource,
)
from .lock import SessionLockCoordinator
from .models import (
    Account,
    DisplayAsset,
    LinkEvent,
    LockState,
    RouteResult,
    StateSnapshot,
)

logger = logging.getLogger(__name__)


class WalletSession:
    """
    Composition root for the wallet home screen.

    Wires the asset aggregation, deep-link routing and auto-lock to the
    host's state, lifecycle and link sources. Subscriptions are taken in
    start() and released in stop(); the session also works as a context
    manager.

    Example:
        >>> with WalletSession(store, app_state, show_lock, resolver) as session:
        ...     assets = session.get_display_assets()
    """

    def __init__(
        self,
        state_source: StateSource,
        lifecycle_source: LifecycleSource,
        lock_sink: LockSink,
        resolver: DestinationResolver,
        deep_link_source: Optional[DeepLinkSource] = None,
        settings: Optional[SessionSettings] = None,
        scheduler: Optional[Scheduler] = None
    ):
        """
        Initialize the session. Nothing is subscribed until start().

        Args:
            state_source: Wallet state snapshots and change notifications
            lifecycle_source: App foreground/background signals
            lock_sink: Presents the lock screen
            resolver: Destination resolver for deep links
            deep_link_source: Optional deep-link event source
            settings: Session settings (default: from environment)
            scheduler: Timer scheduler for auto-lock (default: running loop)
        """
        self.state_source = state_source
        self.lifecycle_source = lifecycle_source
        self.lock_sink = lock_sink
        self.deep_link_source = deep_link_source
        self.settings = settings or SessionSettings()
        self.scheduler = scheduler
        self.router = DeepLinkRouter(resolver, self.settings.deep_link_key)
        self.lock_coordinator: Optional[SessionLockCoordinator] = None
        self.selected_asset: Optional[Any] = None
        self.asset_modal_visible = False
        self._snapshot: Optional[StateSnapshot] = None
        self._assets: Optional[List[DisplayAsset]] = None
        self._exit_stack: Optional[ExitStack] = None

    # Lifecycle

    @property
    def started(self) -> bool:
        return self._exit_stack is not None

    def start(self) -> None:
        """Subscribe to the state, link and lifecycle sources."""
        if self.started:
            return
        with ExitStack() as stack:
            self._snapshot = self.state_source.snapshot()
            stack.callback(self.state_source.subscribe(self._on_state_changed))

            if self.deep_link_source is not None:
                stack.callback(self.deep_link_source.subscribe(self.handle_deep_link))

            coordinator = SessionLockCoordinator(
                self._lock_time(self._snapshot),
                self.lock_sink,
                self.lifecycle_source,
                self.scheduler,
            )
            stack.callback(coordinator.dispose)
            coordinator.start()
            self.lock_coordinator = coordinator

            self._exit_stack = stack.pop_all()
        logger.info("Wallet session started")

    def stop(self) -> None:
        """Release every subscription taken by start()."""
        stack, self._exit_stack = self._exit_stack, None
        if stack is None:
            return
        stack.close()
        logger.info("Wallet session stopped")

    def __enter__(self):
        """Context manager entry"""
        self.start()
        return self

    def __exit__(self, *args):
        """Context manager exit"""
        self.stop()

    # State

    @property
    def snapshot(self) -> StateSnapshot:
        if self._snapshot is None:
            self._snapshot = self.state_source.snapshot()
        return self._snapshot

    @property
    def is_loading(self) -> bool:
        """True until an account is selected."""
        return not self.snapshot.selected_address

    @property
    def lock_state(self) -> LockState:
        if self.lock_coordinator is None:
            return LockState.UNLOCKED
        return self.lock_coordinator.state

    def get_display_assets(self) -> List[DisplayAsset]:
        """
        Get the asset list for the selected account.

        Returns:
            Native entry first (once the balance is known), then tokens

        Raises:
            InvalidAmount: If the account balance or rate is malformed
        """
        if self._assets is None:
            snapshot = self.snapshot
            self._assets = aggregate(
                snapshot.selected_account,
                snapshot.tokens,
                snapshot.conversion_rate,
                snapshot.current_currency,
                self.settings,
            )
        return list(self._assets)

    def get_collectibles(self) -> List[Any]:
        """Collectibles for the collectibles tab, as the state source holds them."""
        return list(self.snapshot.collectibles)

    def get_transactions(self) -> List[Any]:
        """Transactions for the history tab, as the state source holds them."""
        return list(self.snapshot.transactions)

    def get_account_overview(self) -> Optional[Account]:
        """Selected account merged with its identity; None while loading."""
        snapshot = self.snapshot
        address = snapshot.selected_address
        if not address:
            return None
        identity = snapshot.identities.get(address)
        tracked = snapshot.accounts.get(address)
        name = identity.name if identity else None
        if tracked and tracked.name:
            name = tracked.name
        return Account(
            address=address,
            balance=tracked.balance if tracked else None,
            name=name,
        )

    def _on_state_changed(self, snapshot: StateSnapshot) -> None:
        previous, self._snapshot = self._snapshot, snapshot
        self._assets = None
        if self.lock_coordinator is None:
            return
        if previous is not None and previous.lock_time == snapshot.lock_time:
            return
        try:
            self.lock_coordinator.update_timeout(self._lock_time(snapshot))
        except InvalidConfig as e:
            logger.error(f"Keeping lock timeout {self.lock_coordinator.timeout}ms: {e}")

    def _lock_time(self, snapshot: StateSnapshot) -> int:
        if snapshot.lock_time is None:
            return self.settings.default_lock_time_ms
        return snapshot.lock_time

    # Asset modal

    def on_asset_selected(self, asset: Any) -> None:
        """Show the asset detail modal for ``asset``."""
        self.selected_asset = asset
        self.asset_modal_visible = True

    def on_asset_dismissed(self) -> None:
        """Hide the asset detail modal."""
        self.asset_modal_visible = False

    # Deep links

    def handle_deep_link(self, event: Union[Mapping[str, Any], LinkEvent]) -> RouteResult:
        """Route an inbound deep-link event."""
        return self.router.handle(event)

"""
Capabilities the wallet session consumes from its host.

Any object with the right methods will do; nothing here needs to be
subclassed.
"""

from typing import Any, Callable, Mapping, Protocol, Union

from .models import AppState, StateSnapshot

Unsubscribe = Callable[[], None]


class StateSource(Protocol):
    """Read-only wallet state that notifies on change"""

    def snapshot(self) -> StateSnapshot: ...

    def subscribe(self, listener: Callable[[StateSnapshot], None]) -> Unsubscribe: ...


class LifecycleSource(Protocol):
    """Emits app foreground/background transitions"""

    def subscribe(self, listener: Callable[[Union[AppState, str]], None]) -> Unsubscribe: ...


class DeepLinkSource(Protocol):
    """Delivers deep-link events as {'error': ..., 'params': {...}}"""

    def subscribe(self, listener: Callable[[Mapping[str, Any]], Any]) -> Unsubscribe: ...


class DestinationResolver(Protocol):
    """Turns a raw link into an in-app navigation action"""

    def parse(self, raw_link: str) -> Any: ...


class Scheduler(Protocol):
    """Single-shot deferred calls; an asyncio event loop satisfies this"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any: ...

    def time(self) -> float: ...


LockSink = Callable[[], Any]

"""Order store and request scopes.

The Store is passed explicitly to whatever renders order state; there is
no ambient global. All state changes go through ``dispatch``, which runs
the reducer synchronously, so two dispatches never interleave.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from .reducer import reduce
from .state import OrderState, initial_state

logger = structlog.get_logger()

T = TypeVar("T")

Listener = Callable[[OrderState], None]


class Store:
    """Holds the current OrderState and notifies subscribers on change."""

    def __init__(
        self,
        reducer: Callable[[OrderState, object], OrderState] = reduce,
        initial: Optional[OrderState] = None,
    ) -> None:
        self._reducer = reducer
        self._state = initial if initial is not None else initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> OrderState:
        return self._state

    def dispatch(self, action: object) -> OrderState:
        """Reduce one action into the state and notify subscribers if it changed."""
        logger.debug("action_dispatched", action=type(action).__name__)
        next_state = self._reducer(self._state, action)
        if next_state is self._state:
            return next_state
        self._state = next_state
        for listener in list(self._listeners):
            listener(next_state)
        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, selector: Callable[[OrderState], T]) -> T:
        return selector(self._state)


class RequestScope:
    """Cancellation token tied to one view's lifetime.

    Operations given a scope drop any response that resolves after the
    scope was cancelled, so a screen the user already left cannot
    overwrite the state of the screen they moved to.

    Example::

        async with RequestScope("order-detail") as scope:
            await operations.fetch_order_detail(order_id, item_id, scope=scope)
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._cancelled = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def spawn(self, awaitable: Awaitable[T]) -> asyncio.Task:
        """Run an awaitable as a task owned by this scope."""
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self) -> None:
        """Mark the scope cancelled and cancel every task it still owns."""
        if self._cancelled:
            return
        self._cancelled = True
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        logger.debug("request_scope_cancelled", scope=self.name, pending=len(pending))

    async def __aenter__(self) -> RequestScope:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.cancel()

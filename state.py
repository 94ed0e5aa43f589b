from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)

Subscriber = Callable[[Any], None]


class StateStore(Generic[T]):
    """
    Holds one immutable state snapshot and notifies subscribers on every publish.

    Snapshots are replaced wholesale; a subscriber always sees a consistent
    value, never a half-applied update.
    """

    def __init__(self, initial: T, on_error: Callable[[str], None] = print):
        self._state = initial
        self._subscribers: list[Subscriber] = []
        self._on_error = on_error

    @property
    def snapshot(self) -> T:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, **changes: Any) -> T:
        self._state = self._state.model_copy(update=changes)
        self._notify()
        return self._state

    def reset(self, state: T) -> T:
        self._state = state
        self._notify()
        return self._state

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception as e:
                self._on_error(f"  [!] state subscriber failed: {e}")

"""
Change notification and lazy recalculation.

- Observable: keeps an ordered list of weakly held observers and notifies them.
- LazyObject: calculate on demand, invalidate on change.
- Handle: relinkable pointer that forwards its target's notifications.
"""
from __future__ import annotations

import weakref
from typing import Generic, List, Optional, Protocol, TypeVar

from .exceptions import ConfigurationError


class Observer(Protocol):
    def update(self) -> None:
        ...


class Observable:
    """
    Observers are held by weak reference: an observer nobody else keeps alive
    is dropped from the list instead of being notified forever.
    """

    def __init__(self) -> None:
        self._observers: List[weakref.ref] = []

    def _live(self) -> List[Observer]:
        live = []
        refs = []
        for ref in self._observers:
            observer = ref()
            if observer is not None:
                live.append(observer)
                refs.append(ref)
        self._observers = refs
        return live

    def register_observer(self, observer: Observer) -> None:
        if not any(o is observer for o in self._live()):
            self._observers.append(weakref.ref(observer))

    def unregister_observer(self, observer: Observer) -> None:
        self._observers = [ref for ref in self._observers if ref() is not None and ref() is not observer]

    def notify_observers(self) -> None:
        # snapshot: observers may unregister while being notified
        for observer in self._live():
            observer.update()

    @property
    def observer_count(self) -> int:
        return len(self._live())


class LazyObject(Observable):
    """
    Object whose results are computed on first access after a change.

    ``update()`` only marks the object stale; the work happens in
    ``calculate()``, which subclasses reach through their accessors.
    If ``perform_calculations()`` raises, the object stays stale.
    """

    def __init__(self) -> None:
        super().__init__()
        self._calculated = False
        self._updating = False

    @property
    def is_calculated(self) -> bool:
        return self._calculated

    def calculate(self) -> None:
        if not self._calculated:
            self.perform_calculations()
            self._calculated = True

    def perform_calculations(self) -> None:
        raise NotImplementedError

    def update(self) -> None:
        # always forward: observers may be fresh while this object is stale
        if self._updating:
            return
        self._updating = True
        try:
            self._calculated = False
            self.notify_observers()
        finally:
            self._updating = False


T = TypeVar("T")


class Handle(Observable, Generic[T]):
    """
    Shared, relinkable reference to an observable object.

    Observers of the handle are notified both when the linked object
    notifies and when the handle is relinked.
    """

    def __init__(self, link: Optional[T] = None) -> None:
        super().__init__()
        self._link: Optional[T] = None
        if link is not None:
            self.link_to(link)

    def empty(self) -> bool:
        return self._link is None

    def current_link(self) -> T:
        if self._link is None:
            raise ConfigurationError("Empty handle cannot be dereferenced.")
        return self._link

    def link_to(self, link: Optional[T]) -> None:
        if link is self._link:
            return
        if isinstance(self._link, Observable):
            self._link.unregister_observer(self)
        self._link = link
        if isinstance(link, Observable):
            link.register_observer(self)
        self.notify_observers()

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return f"Handle({self._link!r})"

"""Observer pattern base classes for board views."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Observer(ABC):
    """Something that wants to hear when the board changes."""

    @abstractmethod
    def notify(self) -> None:
        """React to a change in the observed subject."""


class Subject(ABC):
    """Keeps a list of observers and tells them about changes."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def attach(self, observer: Observer) -> None:
        self._observers.append(observer)

    def detach(self, observer: Observer) -> None:
        """Remove every registration of ``observer``."""
        self._observers = [o for o in self._observers if o is not observer]

    def notify_observers(self) -> None:
        for observer in self._observers:
            observer.notify()

    @abstractmethod
    def state(self, row: int, col: int) -> str:
        """Return the character at a board cell."""
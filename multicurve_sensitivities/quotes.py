from __future__ import annotations

import math
from typing import Optional

from .observer import Observable


class SimpleQuote(Observable):
    """Mutable market quote (decimal rate) that notifies observers on change."""

    def __init__(self, value: Optional[float] = None) -> None:
        super().__init__()
        self._value = None if value is None else float(value)

    def value(self) -> float:
        if self._value is None:
            raise ValueError("Invalid quote: no value set.")
        return self._value

    def is_valid(self) -> bool:
        return self._value is not None and math.isfinite(self._value)

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value; returns the change (0.0 when nothing changed)."""
        new = None if value is None else float(value)
        old = self._value
        if new == old:
            return 0.0
        self._value = new
        self.notify_observers()
        if old is None or new is None:
            return 0.0
        return new - old

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"

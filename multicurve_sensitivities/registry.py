from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Tuple

import pandas as pd

from .curves import ZERO_YIELD_LINEAR, CurveFamily
from .exceptions import ConfigurationError
from .observer import Handle, Observer
from .quotes import SimpleQuote

logger = logging.getLogger("MultiCurve.Registry")

_REQUIRED_ACCESSORS = ("nodes", "calibrating_instruments", "pillar_dates")


class CurveRegistry:
    """
    Named set of curve handles, iterated in insertion order.

    Every handle must resolve to a zero-yield curve with linear interpolation
    that exposes its nodes and calibrating instruments, with exactly one
    instrument per non-reference node. Anything else is a ConfigurationError
    naming the curve.
    """

    def __init__(self, curves: Mapping[str, Handle]):
        if len(curves) == 0:
            raise ConfigurationError("At least one curve is required.")

        self._handles: Dict[str, Handle] = dict(curves)
        self.validate()

        logger.info(
            "Registered %d curve(s): %s",
            len(self._handles),
            ", ".join(f"{n} ({len(self.curve(n).pillar_dates())} nodes)" for n in self._handles),
        )

    def validate(self) -> None:
        """Check every handle against the required curve family and shape."""
        for name, handle in self._handles.items():
            self._check_curve(name, handle)

    @staticmethod
    def _check_curve(name: str, handle: Handle) -> None:
        if not isinstance(handle, Handle):
            raise ConfigurationError(f"Curve '{name}' must be given as a Handle.", curve_name=name)
        if handle.empty():
            raise ConfigurationError(f"Curve '{name}' is an empty handle.", curve_name=name)

        curve = handle.current_link()
        family = getattr(curve, "family", None)
        if not isinstance(family, CurveFamily) or family != ZERO_YIELD_LINEAR:
            raise ConfigurationError(
                f"Couldn't resolve curve '{name}' to a zero-yield curve with linear interpolation "
                f"(got {type(curve).__name__}).",
                curve_name=name,
            )
        missing = [a for a in _REQUIRED_ACCESSORS if not callable(getattr(curve, a, None))]
        if missing:
            raise ConfigurationError(
                f"Curve '{name}' does not provide {', '.join(missing)}.",
                curve_name=name,
            )

        n_instruments = len(curve.calibrating_instruments())
        n_nodes = len(curve.pillar_dates())
        if n_instruments != n_nodes:
            raise ConfigurationError(
                f"Curve '{name}' has {n_instruments} instruments for {n_nodes} nodes.",
                curve_name=name,
            )

    # ---- observer wiring ----

    def subscribe(self, observer: Observer) -> None:
        for handle in self._handles.values():
            handle.register_observer(observer)

    def unsubscribe(self, observer: Observer) -> None:
        for handle in self._handles.values():
            handle.unregister_observer(observer)

    # ---- access ----

    def names(self) -> List[str]:
        return list(self._handles)

    def handle(self, name: str) -> Handle:
        return self._handles[name]

    def curve(self, name: str):
        return self._handles[name].current_link()

    def items(self) -> Iterator[Tuple[str, Handle]]:
        return iter(self._handles.items())

    def nodes(self, name: str) -> List[Tuple[pd.Timestamp, float]]:
        """All nodes of one curve, reference-date node included."""
        return list(self.curve(name).nodes())

    def quotes(self, name: str) -> List[SimpleQuote]:
        return [helper.quote() for helper in self.curve(name).calibrating_instruments()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __repr__(self) -> str:
        return f"CurveRegistry({self.names()!r})"

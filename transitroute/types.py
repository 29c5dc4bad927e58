"""Value types shared by the loader, the router and the command line."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edge:
    """A directed connection between two stops served by one route."""

    to: str
    time: float
    fare: float
    route_id: str = ""


@dataclass
class State:
    """A partial or finished journey found by the router.

    The defaults describe the result reported when no path exists.
    States are ordered by ``total_cost`` alone.
    """

    total_cost: float = math.inf
    fare: float = -1.0
    time: float = -1.0
    transfers: int = -1
    node: str = ""
    path: tuple[str, ...] = ()
    last_route: str = ""

    def __lt__(self, other: State) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self.total_cost < other.total_cost

    def __gt__(self, other: State) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self.total_cost > other.total_cost

    def found(self) -> bool:
        """Return True when this state carries a path to its destination."""
        return bool(self.path)


@dataclass(frozen=True)
class FareProduct:
    """A priced fare from the fare attributes table."""

    amount: float
    currency: str


@dataclass(frozen=True)
class TimedStop:
    """One row of a trip's stop sequence."""

    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: str


@dataclass
class Mode:
    """A named weighting of fare, time and transfers, with its result."""

    label: str
    alpha: float
    beta: float
    gamma: float
    result: State = field(default_factory=State)
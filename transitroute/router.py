"""Multi-objective shortest path search over the stop graph."""

from __future__ import annotations

import heapq
from dataclasses import replace
from itertools import count

from .transit_data import TransitData
from .types import State


class Router:
    """Finds journeys that minimise a weighted sum of fare, time and transfers."""

    def __init__(self, data: TransitData) -> None:
        self.data = data

    def multi_objective_dijkstra(
        self, start: str, end: str, alpha: float, beta: float, gamma: float
    ) -> State:
        """Return the cheapest journey from ``start`` to ``end``.

        The cost of a journey is ``alpha * fare + beta * time + gamma * transfers``,
        where a transfer is counted whenever the route changes between segments.
        If no journey exists, a default :class:`State` with an empty path is returned.
        """
        order = count()
        heap: list[tuple[float, int, State]] = [
            (0.0, next(order), State(0.0, 0.0, 0.0, 0, start, (), ""))
        ]
        visited: set[str] = set()

        while heap:
            _, _, current = heapq.heappop(heap)
            if current.node in visited:
                continue
            visited.add(current.node)

            path = current.path + (current.node,)
            if current.node == end:
                return replace(current, path=path)

            for edge in self.data.graph.get(current.node, ()):
                if edge.to in visited:
                    continue
                time = current.time + edge.time
                is_transfer = bool(current.last_route) and current.last_route != edge.route_id
                transfers = current.transfers + (1 if is_transfer else 0)
                fare = current.fare + edge.fare
                cost = alpha * fare + beta * time + gamma * transfers
                state = State(cost, fare, time, transfers, edge.to, path, edge.route_id)
                heapq.heappush(heap, (cost, next(order), state))

        return State()
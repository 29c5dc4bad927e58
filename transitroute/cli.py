"""Command line front end: compare routing strategies between two stops."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence

from .router import Router
from .transit_data import GtfsLoadError, TransitData
from .types import Mode

DATA_FOLDER = "data"
ARCHIVE_NAME = "gtfs_london.zip"
DEFAULT_FLAT_FARE = 2.50
USAGE = "Usage: transitroute <start_stop_id|name|code> <end_stop_id|name|code>"


def resolve_stop(data: TransitData, text: str) -> str:
    """Map a stop id, station name or station code to a stop id in the graph."""
    if text in data.graph:
        return text
    by_name = data.name_to_stop_id.get(text)
    if by_name is not None and by_name in data.graph:
        return by_name
    by_code = data.code_to_stop_id.get(text)
    if by_code is not None and by_code in data.graph:
        return by_code
    return text


def _segment_routes(data: TransitData, path: Sequence[str]) -> Iterable[str]:
    """Yield the route id of the first edge joining each consecutive pair of stops."""
    for origin, target in zip(path, path[1:]):
        edge = next((e for e in data.graph.get(origin, ()) if e.to == target), None)
        if edge is not None:
            yield edge.route_id


def count_transfers(data: TransitData, path: Sequence[str]) -> int:
    """Count route changes along ``path``."""
    transfers = 0
    previous = ""
    for route in _segment_routes(data, path):
        if previous and route != previous:
            transfers += 1
        previous = route
    return transfers


def flat_fare(data: TransitData, start: str, end: str) -> float:
    """Return the zone-to-zone fare between two stops, or the default flat fare."""
    key = f"{data.stop_id_to_zone.get(start, '')}_{data.stop_id_to_zone.get(end, '')}"
    fare_id = data.area_pair_to_fare_id.get(key)
    if fare_id is not None and fare_id in data.fare_id_to_price:
        return data.fare_id_to_price[fare_id]
    return DEFAULT_FLAT_FARE


def default_modes() -> list[Mode]:
    """Return the Cheapest, Fastest and Balanced strategies."""
    return [
        Mode("Cheapest", 1.2, 0.1, 0.1),
        Mode("Fastest", 0.1, 0.8, 0.2),
        Mode("Balanced", 0.5, 0.5, 0.5),
    ]


def run_modes(data: TransitData, start: str, end: str, modes: list[Mode]) -> list[Mode]:
    """Route each mode, then recount transfers along its path and rescore it."""
    router = Router(data)
    for mode in modes:
        result = router.multi_objective_dijkstra(start, end, mode.alpha, mode.beta, mode.gamma)
        if result.found():
            result.transfers = count_transfers(data, result.path)
            result.total_cost = (
                mode.alpha * result.fare + mode.beta * result.time + mode.gamma * result.transfers
            )
        mode.result = result
    return modes


def format_stop(data: TransitData, stop_id: str) -> str:
    """Format a stop as ``Name #Number (StopID)``."""
    full_name = data.stop_id_to_name.get(stop_id, "(Unknown)")
    number = "(N/A)"
    hash_pos = full_name.find("#")
    if hash_pos != -1:
        number = full_name[hash_pos:]
        if hash_pos > 0:
            full_name = full_name[: hash_pos - 1]
    return f"{full_name} {number} ({stop_id})"


def format_table(data: TransitData, start: str, end: str, modes: Iterable[Mode]) -> str:
    """Render the comparison table of all modes."""
    lines = [
        "",
        f"*{data.stop_id_to_name.get(start, '')} ({start}) "
        f"to {data.stop_id_to_name.get(end, '')} ({end})",
        "Mode                   | Fare ($) | Time (min) | Transfers | Score ",
        "-------------------------------------------------------------------",
    ]
    for mode in modes:
        s = mode.result
        if not s.found():
            lines.append(f"{mode.label:<22} |  N/A     |    N/A     |    N/A   |   N/A  ")
        else:
            lines.append(
                f"{mode.label:<22} |  {s.fare:5.2f}   |   {s.time:5.1f}    |"
                f"     {s.transfers:2d}    |  {s.total_cost:5.2f} "
            )
    return "\n".join(lines) + "\n"


def describe_route(data: TransitData, path: Sequence[str]) -> list[str]:
    """Describe each segment of ``path``, marking where the route changes."""
    lines = []
    previous = ""
    for origin, target in zip(path, path[1:]):
        edge = next((e for e in data.graph.get(origin, ()) if e.to == target), None)
        if edge is None:
            continue
        route = edge.route_id or "(unknown)"
        origin_text = format_stop(data, origin)
        target_text = format_stop(data, target)
        if previous and route != previous:
            lines.append(
                f"TRANSFER: {origin_text}->{target_text} ({previous}  --->  {route})"
            )
        else:
            lines.append(f"ROUTE:    {origin_text}  --->  {target_text} ({route})")
        previous = route
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Load the GTFS feed and print routing options between two stops."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1

    data = TransitData()
    try:
        data.load(DATA_FOLDER, ARCHIVE_NAME)
    except GtfsLoadError:
        print("Failed to unzip GTFS archive.", file=sys.stderr)
        print("Failed to load GTFS data.", file=sys.stderr)
        return 1

    start = resolve_stop(data, args[0])
    end = resolve_stop(data, args[1])
    if start not in data.graph or end not in data.graph:
        print("Invalid start or end point.", file=sys.stderr)
        return 1

    flat_fare(data, start, end)
    modes = run_modes(data, start, end, default_modes())

    sys.stdout.write(format_table(data, start, end, modes))
    print("\nVisited stations in Cheapest Route:")
    for line in describe_route(data, modes[0].result.path):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
# transitroute

Plan trips through a public transport network described by a GTFS feed.
The package builds a graph of stops from the feed and searches it with
Dijkstra's algorithm, scoring each path by a weighted sum of fare, travel
time and number of transfers:

    score = alpha * fare + beta * time + gamma * transfers

Three strategies are compared side by side (`transitroute.cli.default_modes`):

| Mode     | alpha | beta | gamma |
|----------|-------|------|-------|
| Cheapest | 1.2   | 0.1  | 0.1   |
| Fastest  | 0.1   | 0.8  | 0.2   |
| Balanced | 0.5   | 0.5  | 0.5   |

How the graph is built:

- Consecutive stops of each trip (ordered by `stop_sequence`) are joined by
  an edge in both directions, tagged with the trip's route id.
- Platforms with a `parent_station` are merged into their station.
- Each segment costs a flat 0.50 in fare.
- The time of a segment is the difference of the arrival times in
  `stop_times.txt`, in minutes; it is 5 minutes when a time is missing,
  does not parse, or the difference is not positive.
- A transfer is counted each time the route id changes along a path.

No packages beyond the standard library are needed.

## Installation

    pip install .

## Command line

Put the GTFS archive at `data/gtfs_london.zip`, relative to the current
directory, and give a start and an end stop:

    transitroute 940GZZLUOXC 940GZZLUKSX

A stop can be given by its stop id, or by the name or stop code of a
station (a stop with `location_type` 1). The archive is extracted into
`data/` with Python's `zipfile` module, and the extracted `.txt` files are
deleted again once they have been loaded.

The output is a table with the fare, time, transfers and score of each
mode, followed by every segment of the cheapest route. Segments are shown
as `Name #Number (StopID)`; a change of route is marked `TRANSFER:`.

The command exits with status 1, and a message on standard error, when
fewer than two stops are given, when the archive cannot be extracted, or
when a stop is not in the graph.

## Library use

```python
from transitroute.transit_data import TransitData
from transitroute.router import Router
from transitroute.cli import default_modes, run_modes, format_table, describe_route

data = TransitData()
data.load_directory("gtfs")          # a folder of extracted GTFS .txt files

router = Router(data)
state = router.multi_objective_dijkstra("A", "D", 0.5, 0.5, 0.5)
if state.found():
    print(state.path, state.fare, state.time, state.transfers, state.total_cost)

modes = run_modes(data, "A", "D", default_modes())
print(format_table(data, "A", "D", modes))
print("\n".join(describe_route(data, modes[0].result.path)))
```

- `TransitData.load(folder, zipfile)` extracts `folder/zipfile`, loads the
  tables and removes the extracted `.txt` files. It raises `GtfsLoadError`
  if the archive cannot be opened or extracted.
- `TransitData.load_directory(folder)` reads `stops.txt`,
  `fare_attributes.txt`, `fare_rules.txt`, `trips.txt` and `stop_times.txt`
  from a folder and builds the graph. A missing file is logged and skipped.
- `Router.multi_objective_dijkstra` returns a `State`; when no path exists
  its `path` is empty and `found()` is `False`.
- `resolve_stop`, `count_transfers`, `format_stop` and `flat_fare` in
  `transitroute.cli` are the helpers the command uses.

## Limits

- Routing ignores departure times and service days: it finds paths through
  the network, not timetabled connections.
- The fare of a route is always 0.50 per segment. Fare attributes and fare
  rules are read, but they do not change the fares shown, and `flat_fare`
  returns 2.50 unless its zone-pair tables are filled in by the caller.
- CSV lines are split on every comma, so quoted fields that contain commas
  are not read correctly.
"""Loading of GTFS feeds into a stop graph."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from itertools import pairwise
from pathlib import Path
from typing import Iterator
from zipfile import BadZipFile, ZipFile

from .types import Edge, FareProduct, TimedStop

logger = logging.getLogger(__name__)

SEGMENT_FARE = 0.50
DEFAULT_SEGMENT_MINUTES = 5.0

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_TIME = re.compile(r"\s*([+-]?\d+):\s*([+-]?\d+):\s*([+-]?\d+)")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class GtfsLoadError(Exception):
    """Raised when a GTFS archive cannot be opened or extracted."""


def strip_quotes(s: str) -> str:
    """Remove one pair of surrounding double quotes, if present."""
    if len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        return s[1:-1]
    return s


def _leading_float(s: str) -> float | None:
    match = _FLOAT_PREFIX.match(s)
    if match is None:
        return None
    text = match.group(0)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        return None
    return value


def _leading_int(s: str) -> int | None:
    match = _INT_PREFIX.match(s)
    if match is None:
        return None
    value = int(match.group(0))
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


def is_valid_number(s: str) -> bool:
    """Return True if ``s`` starts with something readable as a number."""
    return _leading_float(s) is not None


def parse_time(t: str) -> int:
    """Convert ``HH:MM:SS`` to seconds, or return -1 if it does not parse."""
    match = _TIME.match(t)
    if match is None:
        return -1
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def _read_rows(path: str | Path, width: int) -> Iterator[list[str]]:
    """Yield the comma-separated fields of each data line, padded to ``width``."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        logger.error("File cannot be opened. %s", path)
        return
    with handle:
        next(handle, None)  # header
        for line in handle:
            fields = line.rstrip("\n").split(",")[:width]
            fields.extend([""] * (width - len(fields)))
            yield fields


@dataclass
class TransitData:
    """Stops, fares, trips and the stop graph built from a GTFS feed."""

    graph: dict[str, list[Edge]] = field(default_factory=dict)
    stop_id_to_name: dict[str, str] = field(default_factory=dict)
    name_to_stop_id: dict[str, str] = field(default_factory=dict)
    code_to_stop_id: dict[str, str] = field(default_factory=dict)
    trip_to_route: dict[str, str] = field(default_factory=dict)
    fare_products: dict[str, FareProduct] = field(default_factory=dict)
    platform_to_station: dict[str, str] = field(default_factory=dict)
    area_pair_to_fare_product: dict[str, str] = field(default_factory=dict)
    stop_id_to_zone: dict[str, str] = field(default_factory=dict)
    stop_times: list[TimedStop] = field(default_factory=list)
    area_pair_to_fare_id: dict[str, str] = field(default_factory=dict)
    fare_id_to_price: dict[str, float] = field(default_factory=dict)
    stop_id_usage_count: dict[str, int] = field(default_factory=dict)

    def load(self, folder: str | Path, zipfile: str) -> None:
        """Extract ``folder/zipfile``, parse its tables and build the graph.

        The extracted text files are removed afterwards.
        """
        folder = Path(folder)
        archive = folder / zipfile
        try:
            with ZipFile(archive) as zf:
                members = zf.namelist()
                zf.extractall(folder)
        except (OSError, BadZipFile) as exc:
            raise GtfsLoadError(f"Failed to unzip GTFS archive {archive}") from exc
        try:
            self.load_directory(folder)
        finally:
            for name in members:
                if name.endswith(".txt"):
                    (folder / name).unlink(missing_ok=True)

    def load_directory(self, folder: str | Path) -> None:
        """Parse the GTFS tables already present in ``folder`` and build the graph."""
        folder = Path(folder)
        self.parse_stops(folder / "stops.txt")
        self.parse_fare_attributes(folder / "fare_attributes.txt")
        self.parse_fare_rules(folder / "fare_rules.txt")
        self.parse_trips(folder / "trips.txt")
        self.parse_stop_times(folder / "stop_times.txt")
        self.build_graph()

    def parse_stops(self, path: str | Path) -> None:
        """Read stop names, zones, platform parents and station lookups."""
        for row in _read_rows(path, 11):
            stop_id, code, name, _desc, _lat, _lon, zone, _plc, location_type, parent, _ = row
            stop_id = strip_quotes(stop_id)
            code = strip_quotes(code)
            name = strip_quotes(name)
            location_type = strip_quotes(location_type)
            parent = strip_quotes(parent)
            zone = strip_quotes(zone)

            if zone:
                self.stop_id_to_zone[stop_id] = zone
            if parent:
                self.platform_to_station[stop_id] = parent
            self.stop_id_to_name[stop_id] = name

            if location_type == "1":
                self.name_to_stop_id[name] = stop_id
                self.code_to_stop_id[code] = stop_id

    def parse_fare_attributes(self, path: str | Path) -> None:
        """Read fare products keyed by fare id."""
        for row in _read_rows(path, 6):
            fare_id, price, currency = (strip_quotes(value) for value in row[:3])
            amount = _leading_float(price)
            if amount is not None:
                self.fare_products[fare_id] = FareProduct(amount, currency)

    def parse_fare_rules(self, path: str | Path) -> None:
        """Map ``origin_destination`` zone pairs to fare ids."""
        for row in _read_rows(path, 5):
            fare_id = strip_quotes(row[0])
            origin = strip_quotes(row[2])
            destination = strip_quotes(row[3])
            if origin and destination and fare_id:
                self.area_pair_to_fare_product[f"{origin}_{destination}"] = fare_id

    def parse_trips(self, path: str | Path) -> None:
        """Map trip ids to route ids."""
        for route_id, _service_id, trip_id in _read_rows(path, 3):
            if trip_id and route_id:
                self.trip_to_route[trip_id] = route_id

    def parse_stop_times(self, path: str | Path) -> None:
        """Collect stop visits; rows whose sequence does not parse are dropped."""
        for trip_id, arrival, _departure, stop_id, seq_text in _read_rows(path, 5):
            sequence = _leading_int(seq_text)
            if sequence is not None:
                self.stop_times.append(TimedStop(trip_id, stop_id, sequence, arrival))

    def build_graph(self) -> None:
        """Link consecutive stops of each trip with edges in both directions."""
        self.stop_times.sort(key=lambda stop: (stop.trip_id, stop.stop_sequence))

        def remap(stop_id: str) -> str:
            return self.platform_to_station.get(stop_id, stop_id)

        for previous, current in pairwise(self.stop_times):
            if previous.trip_id != current.trip_id:
                continue
            origin = remap(previous.stop_id)
            target = remap(current.stop_id)
            route_id = self.trip_to_route.get(current.trip_id, "")

            t1 = parse_time(previous.arrival_time)
            t2 = parse_time(current.arrival_time)
            duration = (t2 - t1) / 60.0 if t1 >= 0 and t2 >= 0 else -1.0
            if duration <= 0.0:
                duration = DEFAULT_SEGMENT_MINUTES

            self.graph.setdefault(origin, []).append(
                Edge(target, duration, SEGMENT_FARE, route_id)
            )
            self.graph.setdefault(target, []).append(
                Edge(origin, duration, SEGMENT_FARE, route_id)
            )
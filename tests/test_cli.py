import zipfile

import pytest

from transitroute.cli import (
    count_transfers,
    default_modes,
    describe_route,
    flat_fare,
    format_stop,
    format_table,
    main,
    resolve_stop,
    run_modes,
)
from transitroute.transit_data import TransitData
from transitroute.types import Edge, Mode


def _data(*links, names=None):
    graph = {}
    for a, b, time, route in links:
        graph.setdefault(a, []).append(Edge(b, time, 0.5, route))
        graph.setdefault(b, []).append(Edge(a, time, 0.5, route))
    return TransitData(graph=graph, stop_id_to_name=dict(names or {}))


@pytest.fixture
def line_data():
    return _data(
        ("A", "B", 2.0, "R1"),
        ("B", "C", 2.0, "R2"),
        names={"A": "Alpha", "B": "Bravo", "C": "Charlie"},
    )


def test_resolve_stop_by_id_name_and_code(line_data):
    line_data.name_to_stop_id["Alpha"] = "A"
    line_data.code_to_stop_id["ALP"] = "A"
    assert resolve_stop(line_data, "B") == "B"
    assert resolve_stop(line_data, "Alpha") == "A"
    assert resolve_stop(line_data, "ALP") == "A"
    assert resolve_stop(line_data, "nowhere") == "nowhere"


def test_resolve_stop_ignores_names_outside_graph(line_data):
    line_data.name_to_stop_id["Ghost"] = "G"
    assert resolve_stop(line_data, "Ghost") == "Ghost"


def test_count_transfers(line_data):
    assert count_transfers(line_data, ("A", "B")) == 0
    assert count_transfers(line_data, ("A", "B", "C")) > count_transfers(line_data, ("B", "C"))


def test_flat_fare_default_and_zone_price(line_data):
    assert flat_fare(line_data, "A", "C") == 2.50
    line_data.stop_id_to_zone.update({"A": "z1", "C": "z2"})
    line_data.area_pair_to_fare_id["z1_z2"] = "F"
    line_data.fare_id_to_price["F"] = 4.75
    assert flat_fare(line_data, "A", "C") == 4.75


def test_default_modes_order():
    modes = default_modes()
    assert [m.label for m in modes] == ["Cheapest", "Fastest", "Balanced"]
    assert all(not m.result.found() for m in modes)


def test_run_modes_rescored(line_data):
    modes = run_modes(line_data, "A", "C", default_modes())
    for mode in modes:
        r = mode.result
        assert r.path == ("A", "B", "C")
        assert r.transfers == count_transfers(line_data, r.path)
        assert r.total_cost == pytest.approx(
            mode.alpha * r.fare + mode.beta * r.time + mode.gamma * r.transfers
        )


def test_run_modes_unreachable():
    data = _data(("A", "B", 1.0, "R1"), ("C", "D", 1.0, "R1"))
    modes = run_modes(data, "A", "D", [Mode("Only", 1.0, 1.0, 1.0)])
    assert modes[0].result.path == ()


def test_format_stop_variants():
    data = TransitData(stop_id_to_name={"S1": "Baker Street #12", "S2": "Plain", "S3": "#7"})
    assert format_stop(data, "S1") == "Baker Street #12 (S1)"
    assert format_stop(data, "S2") == "Plain (N/A) (S2)"
    assert format_stop(data, "X") == "(Unknown) (N/A) (X)"
    assert format_stop(data, "S3").startswith("#7 #7")


def test_format_table(line_data):
    modes = run_modes(line_data, "A", "C", default_modes())
    modes.append(Mode("Missing", 1.0, 1.0, 1.0))
    lines = format_table(line_data, "A", "C", modes).splitlines()
    assert lines[1] == "*Alpha (A) to Charlie (C)"
    assert lines[2] == "Mode                   | Fare ($) | Time (min) | Transfers | Score "
    assert lines[4].startswith("Cheapest".ljust(22) + " |")
    assert "N/A" in lines[-1] and lines[-1].startswith("Missing")


def test_describe_route_marks_transfer(line_data):
    lines = describe_route(line_data, ("A", "B", "C"))
    assert len(lines) == 2
    assert lines[0].startswith("ROUTE:    ")
    assert lines[1].startswith("TRANSFER: ")
    assert "(R1  --->  R2)" in lines[1]


def test_describe_route_unknown_route():
    data = _data(("A", "B", 1.0, ""))
    lines = describe_route(data, ("A", "B"))
    assert lines[0].endswith("((unknown))") or lines[0].endswith("(unknown)")


def _write_feed(folder):
    folder.mkdir()
    tables = {
        "stops.txt": (
            "stop_id,stop_code,stop_name,stop_desc,stop_lat,stop_lon,zone_id,"
            "stop_url,location_type,parent_station,platform\n"
            "A,AC,Alpha,,0,0,1,,1,,\n"
            "B,BC,Bravo,,0,0,1,,1,,\n"
            "C,CC,Charlie,,0,0,2,,1,,\n"
        ),
        "fare_attributes.txt": "fare_id,price,currency_type,payment_method,transfers,duration\n",
        "fare_rules.txt": "fare_id,route_id,origin_id,destination_id,contains_id\n",
        "trips.txt": "route_id,service_id,trip_id\nR1,S,T1\n",
        "stop_times.txt": (
            "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
            "T1,08:00:00,08:00:00,A,1\n"
            "T1,08:04:00,08:04:00,B,2\n"
            "T1,08:10:00,08:10:00,C,3\n"
        ),
    }
    with zipfile.ZipFile(folder / "gtfs_london.zip", "w") as zf:
        for name, text in tables.items():
            zf.writestr(name, text)


def test_main_usage_error(capsys):
    assert main(["only-one"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_archive(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["A", "C"]) == 1
    assert "Failed to load GTFS data." in capsys.readouterr().err


def test_main_full_run(tmp_path, monkeypatch, capsys):
    _write_feed(tmp_path / "data")
    monkeypatch.chdir(tmp_path)
    assert main(["Alpha", "CC"]) == 0
    out = capsys.readouterr().out
    assert "*Alpha (A) to Charlie (C)" in out
    assert "Visited stations in Cheapest Route:" in out
    assert "ROUTE:    Alpha (N/A) (A)  --->  Bravo (N/A) (B) (R1)" in out
    assert list((tmp_path / "data").glob("*.txt")) == []


def test_main_invalid_stop(tmp_path, monkeypatch, capsys):
    _write_feed(tmp_path / "data")
    monkeypatch.chdir(tmp_path)
    assert main(["A", "Nowhere"]) == 1
    assert "Invalid start or end point." in capsys.readouterr().err
"""Tests for NOAAStormEventRepository."""

from datetime import date

import pandas as pd
import pytest
from storm_clusters.domain.exceptions import SchemaError
from storm_clusters.infrastructure.repositories import noaa_storm_event_repository
from storm_clusters.infrastructure.repositories.noaa_storm_event_repository import (
    NOAAStormEventRepository,
)

NOAA_HEADER = "REFNUM,BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"


def test_load_scales_damage(noaa_csv):
    """Amounts are multiplied by their decoded magnitude."""
    events = {e.event_id: e for e in NOAAStormEventRepository(str(noaa_csv)).get_events()}

    assert len(events) == 4
    assert events[1].property_damage == 25000.0
    assert events[1].crop_damage == 0.0
    assert events[1].injuries == 15
    assert events[2].property_damage == 2.5e6
    assert events[2].crop_damage == 1e9
    assert events[3].property_damage == 0.0
    assert events[3].crop_damage == 5000.0
    assert events[3].fatalities == 1
    assert events[4].property_damage == 3e6
    assert events[4].event_type == "HIGH WIND"


def test_load_tolerates_bad_dates(noaa_csv):
    """Unparseable dates become None instead of failing."""
    events = {e.event_id: e for e in NOAAStormEventRepository(str(noaa_csv)).get_events()}
    assert events[1].begin_date == date(1950, 4, 18)
    assert events[2].begin_date is None
    assert events[4].begin_date == date(1995, 6, 1)


def test_load_compressed(tmp_path, noaa_csv):
    """Compressed files are read transparently."""
    compressed = tmp_path / "StormData.csv.bz2"
    pd.read_csv(noaa_csv, dtype=str, keep_default_na=False).to_csv(compressed, index=False)

    events = NOAAStormEventRepository(str(compressed)).get_events()

    assert [e.event_id for e in events] == [1, 2, 3, 4]


def test_load_without_date_column(tmp_path):
    """The begin date column is optional."""
    path = tmp_path / "storm.csv"
    path.write_text(
        "REFNUM,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
        "1,FLOOD,0,0,1,K,0,\n",
        encoding="utf-8",
    )
    events = NOAAStormEventRepository(str(path)).get_events()
    assert events[0].begin_date is None
    assert events[0].property_damage == 1000.0


def test_missing_file(tmp_path):
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        NOAAStormEventRepository(str(tmp_path / "missing.csv")).get_events()


def test_missing_column(tmp_path):
    """Missing required columns fail fast."""
    path = tmp_path / "storm.csv"
    path.write_text("REFNUM,EVTYPE,FATALITIES\n1,FLOOD,0\n", encoding="utf-8")
    with pytest.raises(SchemaError, match="PROPDMG"):
        NOAAStormEventRepository(str(path)).get_events()


@pytest.mark.parametrize(
    "row",
    [
        "1,4/18/1950 0:00:00,FLOOD,-1,0,1,K,0,",
        "1,4/18/1950 0:00:00,FLOOD,0,0,lots,K,0,",
        "1,4/18/1950 0:00:00,FLOOD,0,,1,K,0,",
        "1,4/18/1950 0:00:00,FLOOD,1.5,0,1,K,0,",
        "1,4/18/1950 0:00:00,FLOOD,0,0.7,1,K,0,",
        "1.5,4/18/1950 0:00:00,FLOOD,0,0,1,K,0,",
    ],
)
def test_invalid_numbers(tmp_path, row):
    """Negative, non-numeric, blank or fractional-count numbers fail fast."""
    path = tmp_path / "storm.csv"
    path.write_text(NOAA_HEADER + row + "\n", encoding="utf-8")
    with pytest.raises(SchemaError):
        NOAAStormEventRepository(str(path)).get_events()


def test_duplicate_ids(tmp_path):
    """Identifiers must be unique."""
    path = tmp_path / "storm.csv"
    path.write_text(
        NOAA_HEADER
        + "1,4/18/1950 0:00:00,FLOOD,0,0,1,K,0,\n"
        + "1,4/18/1950 0:00:00,HAIL,0,0,1,K,0,\n",
        encoding="utf-8",
    )
    with pytest.raises(SchemaError):
        NOAAStormEventRepository(str(path)).get_events()


def test_custom_column_names(tmp_path):
    """Column names can be remapped."""
    path = tmp_path / "storm.csv"
    path.write_text("id,type,f,i,p,pe,c,ce\n9,HAIL,0,2,4,K,0,\n", encoding="utf-8")
    columns = {
        "event_id": "id",
        "event_type": "type",
        "fatalities": "f",
        "injuries": "i",
        "property_damage": "p",
        "property_damage_exp": "pe",
        "crop_damage": "c",
        "crop_damage_exp": "ce",
    }
    events = NOAAStormEventRepository(str(path), columns=columns).get_events()
    assert events[0].event_id == 9
    assert events[0].property_damage == 4000.0
    assert events[0].injuries == 2


class _FakeResponse:
    def __init__(self, chunks):
        self.chunks = chunks

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        return iter(self.chunks)


def test_download(tmp_path, monkeypatch):
    """Downloads are streamed to the destination."""
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return _FakeResponse([b"REFNUM,", b"EVTYPE\n"])

    monkeypatch.setattr(noaa_storm_event_repository.requests, "get", fake_get)
    target = tmp_path / "data" / "storm.csv"

    path = NOAAStormEventRepository.download("http://example.org/storm.csv", str(target))

    assert path == target
    assert target.read_bytes() == b"REFNUM,EVTYPE\n"
    assert calls[0][0] == "http://example.org/storm.csv"
    assert calls[0][1]["stream"] is True


def test_download_skips_existing(tmp_path, monkeypatch):
    """An existing file is not downloaded again unless forced."""
    target = tmp_path / "storm.csv"
    target.write_text("cached", encoding="utf-8")

    def fail_get(url, **kwargs):
        raise AssertionError("should not download")

    monkeypatch.setattr(noaa_storm_event_repository.requests, "get", fail_get)

    NOAAStormEventRepository.download("http://example.org/storm.csv", str(target))
    assert target.read_text(encoding="utf-8") == "cached"


def test_whole_number_counts_with_decimals(tmp_path):
    """Counts written as '15.00' load as integers."""
    path = tmp_path / "storm.csv"
    path.write_text(
        NOAA_HEADER + "1.00,4/18/1950 0:00:00,TORNADO,2.00,15.00,25,K,0,\n", encoding="utf-8"
    )

    event = NOAAStormEventRepository(str(path)).get_events()[0]

    assert event.event_id == 1
    assert event.fatalities == 2
    assert event.injuries == 15


def test_unused_columns_are_skipped(tmp_path):
    """Columns outside the event schema are not loaded."""
    path = tmp_path / "storm.csv"
    path.write_text(
        "STATE,REFNUM,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP,REMARKS\n"
        'AL,1,HAIL,0,0,1,K,0,,"long, free text"\n',
        encoding="utf-8",
    )
    repository = NOAAStormEventRepository(str(path))

    events = repository.get_events()

    assert len(events) == 1
    assert events[0].property_damage == 1000.0

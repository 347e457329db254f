"""Shared fixtures."""

import pytest

from storm_clusters.domain.entities.storm_event import StormEvent

NOAA_HEADER = "REFNUM,BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"


@pytest.fixture
def wind_events():
    """Three wind events sharing the 'wind' stem."""
    return [
        StormEvent(event_id=1, event_type="HIGH WIND", property_damage=1000.0),
        StormEvent(event_id=2, event_type="WINDS", property_damage=2000.0, injuries=1),
        StormEvent(event_id=3, event_type="STRONG WIND", property_damage=1500.0, fatalities=1),
    ]


@pytest.fixture
def mixed_events():
    """Events spread over six stems with distinct damage profiles."""
    batches = [
        ("FLOOD", 6, dict(property_damage=50000.0, crop_damage=20000.0)),
        ("FLASH FLOOD", 4, dict(property_damage=80000.0, fatalities=1)),
        ("HAIL", 5, dict(property_damage=100.0, crop_damage=5000.0)),
        ("TORNADO", 5, dict(property_damage=500000.0, fatalities=3, injuries=20)),
        ("EXCESSIVE HEAT", 4, dict(fatalities=5, injuries=10)),
        ("123-456", 2, dict(property_damage=1.0)),
    ]
    events = []
    event_id = 1
    for label, count, fields in batches:
        for _ in range(count):
            events.append(StormEvent(event_id=event_id, event_type=label, **fields))
            event_id += 1
    return events


@pytest.fixture
def noaa_csv(tmp_path):
    """Small NOAA-style CSV with a mix of magnitude codes and dates."""
    rows = [
        "1,4/18/1950 0:00:00,TORNADO,0,15,25,K,0,",
        "2,not a date,HAIL,0,0,2.5,m,1,B",
        "3,4/18/1950 0:00:00,TSTM WIND,1,0,10,H,5,K",
        "4,6/1/1995 0:00:00,HIGH WIND,0,1,3,M,0,",
    ]
    path = tmp_path / "storm.csv"
    path.write_text(NOAA_HEADER + "\n".join(rows) + "\n", encoding="utf-8")
    return path

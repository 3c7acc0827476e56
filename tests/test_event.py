from datetime import datetime, timezone

import pytest

from localpvkit.event import (
    Event,
    EventList,
    EventListBuilder,
    has_reason,
    has_string_in_message,
    is_bd_event,
    is_bdc_event,
    is_pod_event,
    is_type,
)


def kind_event(kind):
    return Event({"involvedObject": {"kind": kind}})


@pytest.mark.parametrize("kind,expected", [("BlockDeviceClaim", True), ("Pod", False)])
def test_is_bdc_event(kind, expected):
    assert is_bdc_event()(kind_event(kind)) is expected


@pytest.mark.parametrize("kind,expected", [("BlockDevice", True), ("Pod", False)])
def test_is_bd_event(kind, expected):
    assert is_bd_event()(kind_event(kind)) is expected


@pytest.mark.parametrize("kind,expected", [("BlockDeviceClaim", False), ("Pod", True)])
def test_is_pod_event(kind, expected):
    assert is_pod_event()(kind_event(kind)) is expected


def test_kind_property():
    assert kind_event("Pod").kind == "Pod"
    assert Event({}).kind == ""


@pytest.mark.parametrize(
    "available,check,expected", [("Normal", "Normal", True), ("Normal", "Warning", False)]
)
def test_is_type(available, check, expected):
    assert is_type(check)(Event({"type": available})) is expected


@pytest.mark.parametrize(
    "available,check,expected",
    [
        ("BlockDeviceReleased", "BlockDeviceReleased", True),
        ("BlockDeviceClaimBound", "BlockDeviceClaimed", False),
    ],
)
def test_has_reason(available, check, expected):
    assert has_reason(check)(Event({"reason": available})) is expected


@pytest.mark.parametrize(
    "message,substr,expected",
    [
        (
            "Released from BDC: bdc-pvc-080b002e-c345-4a3d-88ab-324c41d41819",
            "bdc-pvc-080b002e-c345-4a3d-88ab-324c41d41819",
            True,
        ),
        (
            "Released from BDC: bdc-pvc-080b002e-c345-4a3d-88ab-324c41d42000",
            "bdc-pvc-080b002e-c345-4a3d-88ab-324c41d41819",
            False,
        ),
    ],
)
def test_has_string_in_message(message, substr, expected):
    assert has_string_in_message(substr)(Event({"message": message})) is expected


def timed(name, seconds):
    return Event(
        {
            "metadata": {"name": name},
            "lastTimestamp": datetime.fromtimestamp(seconds, tz=timezone.utc),
        }
    )


def sample_events():
    return [timed("Event 1", 500), timed("Event 2", 600), timed("Event 3", 400)]


def names(events):
    return [event.obj["metadata"]["name"] for event in events]


def test_latest_first_sort():
    result = EventList(sample_events()).latest_first_sort()
    assert names(result) == ["Event 2", "Event 1", "Event 3"]


def test_latest_last_sort():
    result = EventList(sample_events()).latest_last_sort()
    assert names(result) == ["Event 3", "Event 1", "Event 2"]


def test_sort_is_stable_for_equal_timestamps():
    events = [timed("a", 100), timed("b", 100), timed("c", 50)]
    assert names(EventList(list(events)).latest_first_sort()) == ["a", "b", "c"]
    assert names(EventList(list(events)).latest_last_sort()) == ["c", "a", "b"]


def test_event_list_len():
    assert len(EventList(sample_events())) == 3


def test_builder_from_none_is_empty():
    assert len(EventListBuilder.from_api_list(None).list()) == 0


def test_builder_filters():
    api = {
        "items": [
            {"involvedObject": {"kind": "Pod"}, "type": "Normal"},
            {"involvedObject": {"kind": "Pod"}, "type": "Warning"},
            {"involvedObject": {"kind": "BlockDevice"}, "type": "Normal"},
        ]
    }
    builder = EventListBuilder.from_api_list(api)
    assert len(builder.list()) == 3
    filtered = builder.with_filter(is_pod_event(), is_type("Normal")).list()
    assert [event.obj for event in filtered] == [api["items"][0]]
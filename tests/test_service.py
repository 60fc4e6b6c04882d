"""Tests for CollectorService ingestion and query operations."""

from __future__ import annotations

import pytest

from errors import BadRequestError
from service import CollectorService


def test_register_then_update_messages(collector: CollectorService, device_payload: dict) -> None:
    first = collector.register_device(device_payload)
    second = collector.register_device(device_payload)

    assert first.success and first.message == "Device registered"
    assert second.success and second.message == "Device updated"


def test_update_replaces_fields(collector: CollectorService, device_payload: dict) -> None:
    collector.register_device(device_payload)
    collector.register_device({**device_payload, "ip": "10.0.0.6", "status": "idle"})

    devices = collector.list_devices().devices
    assert len(devices) == 1
    assert devices[0].id == "d1"
    assert devices[0].ip == "10.0.0.6"
    assert devices[0].status == "idle"


def test_caller_last_updated_is_ignored(collector: CollectorService, device_payload: dict, clock) -> None:
    collector.register_device({**device_payload, "lastUpdated": "1999-01-01T00:00:00Z"})

    record = collector.list_devices().devices[0]
    assert record.last_updated == clock.now


@pytest.mark.parametrize("field", ["id", "ip", "status", "position"])
def test_register_without_required_field_fails(collector: CollectorService, device_payload: dict, field: str) -> None:
    payload = {key: value for key, value in device_payload.items() if key != field}

    ack = collector.register_device(payload)

    assert ack.success is False
    assert ack.fields == [field]
    assert field in ack.error
    assert collector.list_devices().devices == []


def test_register_failure_does_not_touch_readings(collector: CollectorService) -> None:
    collector.submit_reading({"value": 1, "timestamp": "T1"})

    ack = collector.register_device({"id": "d1"})

    assert ack.success is False
    assert len(collector.list_readings().data_points) == 1


def test_failed_update_keeps_existing_record(collector: CollectorService, device_payload: dict) -> None:
    collector.register_device(device_payload)
    before = collector.list_devices().devices

    ack = collector.register_device({**device_payload, "position": {"latitude": 5}})

    assert ack.success is False
    assert ack.fields == ["position.longitude"]
    assert collector.list_devices().devices == before


def test_submit_reading_for_unknown_device(collector: CollectorService) -> None:
    ack = collector.submit_reading({"value": 3, "timestamp": "T1", "deviceId": "ghost"})

    assert ack.success is True
    assert ack.message is None
    assert [r.value for r in collector.list_readings("ghost").data_points] == [3]
    assert collector.list_devices().devices == []


def test_submit_reading_validation_failure(collector: CollectorService) -> None:
    ack = collector.submit_reading({"timestamp": "T1"})

    assert ack.success is False
    assert ack.fields == ["value"]
    assert collector.list_readings().data_points == []


def test_list_readings_scenario(collector: CollectorService) -> None:
    collector.submit_reading({"value": 5, "timestamp": "T1"})
    collector.submit_reading({"value": 7, "timestamp": "T2", "deviceId": "d1"})

    everything = collector.list_readings().data_points
    assert [(r.value, r.timestamp, r.device_id) for r in everything] == [(5, "T1", None), (7, "T2", "d1")]

    only_d1 = collector.list_readings("d1").data_points
    assert [(r.value, r.timestamp, r.device_id) for r in only_d1] == [(7, "T2", "d1")]


def test_empty_filter_returns_everything(collector: CollectorService) -> None:
    collector.submit_reading({"value": 5, "timestamp": "T1"})
    assert len(collector.list_readings("").data_points) == 1


def test_get_device_detail(collector: CollectorService, device_payload: dict) -> None:
    collector.register_device(device_payload)
    collector.submit_reading({"value": 1, "timestamp": "T1", "deviceId": "d1"})
    collector.submit_reading({"value": 2, "timestamp": "T2", "deviceId": "d2"})

    detail = collector.get_device("d1")

    assert detail.device.id == "d1"
    assert [r.value for r in detail.data_points] == [1]


def test_get_unknown_device_is_empty(collector: CollectorService) -> None:
    detail = collector.get_device("nobody")

    assert detail.device is None
    assert detail.data_points == []


@pytest.mark.parametrize("payload", [None, [], ["id", "d1"], "d1", 42])
def test_non_object_payload_is_bad_request(collector: CollectorService, payload) -> None:
    with pytest.raises(BadRequestError):
        collector.register_device(payload)
    with pytest.raises(BadRequestError):
        collector.submit_reading(payload)


def test_stats(collector: CollectorService, device_payload: dict) -> None:
    collector.register_device(device_payload)
    collector.submit_reading({"value": 1, "timestamp": "T1"})

    stats = collector.stats()

    assert stats.status == "ok"
    assert stats.devices == 1
    assert stats.data_points == 1
    assert stats.capacity == 100


def test_last_updated_wire_format_has_milliseconds(collector: CollectorService, device_payload: dict) -> None:
    collector.register_device(device_payload)

    record = collector.list_devices().devices[0]
    wire = record.model_dump(mode="json", by_alias=True)

    assert wire["lastUpdated"] == "2026-01-01T00:00:01.000Z"

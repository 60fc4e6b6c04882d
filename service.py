# ─────────────────────────────────────────────────────────────────
# service.py - Collector Service
#
# The thin layer between HTTP routes and the two stores.
#
#   register_device → DeviceRegistry.upsert
#   submit_reading  → ReadingLog.append
#   list_devices / list_readings / get_device / stats → snapshots
#
# ValidationError raised by a store is caught HERE and turned into a
# failed Ack, so it never travels past this boundary. The two stores
# are never cross-checked: a reading for an unknown device is fine.
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Any, Mapping, Optional

from database import DeviceRegistry, ReadingLog
from errors import BadRequestError, ValidationError
from models import Ack, DeviceDetail, DeviceList, HealthStatus, ReadingList

logger = logging.getLogger("collector")


def _require_object(payload: Any) -> Mapping:
    if not isinstance(payload, Mapping):
        raise BadRequestError()
    return payload


def _failure(error: ValidationError) -> Ack:
    return Ack(success=False, error=str(error), fields=error.fields)


class CollectorService:
    """Ingestion and query operations over a DeviceRegistry and a ReadingLog."""

    def __init__(self, registry: DeviceRegistry, readings: ReadingLog, service_name: str = "telemetry-collector"):
        self.registry = registry
        self.readings = readings
        self.service_name = service_name

    # ── INGESTION ─────────────────────────────────────────────────

    def register_device(self, payload: Any) -> Ack:
        """
        Create or update a device from an agent heartbeat.

        Expected payload:
        {
            "id": "d1",
            "ip": "10.0.0.5",
            "position": {"latitude": 37.77, "longitude": -122.41},
            "status": "online"
        }

        Raises BadRequestError only when the payload is not an object.
        """
        payload = _require_object(payload)

        try:
            record, was_created = self.registry.upsert(
                payload.get("id"),
                payload.get("ip"),
                payload.get("position"),
                payload.get("status"),
            )
        except ValidationError as error:
            logger.warning(f"Rejected device registration: {error}")
            return _failure(error)

        if was_created:
            logger.info(f"✅ Device registered: '{record.id}' | ip: {record.ip} | status: {record.status}")
            return Ack(success=True, message="Device registered")

        logger.info(f"💓 Device updated: '{record.id}' | ip: {record.ip} | status: {record.status}")
        return Ack(success=True, message="Device updated")

    def submit_reading(self, payload: Any) -> Ack:
        """
        Append one reading to the log.

        Expected payload:
        {"value": 42, "timestamp": "2026-03-01T10:34:22.512Z", "deviceId": "d1"}

        `deviceId` is optional and is not checked against the registry.
        """
        payload = _require_object(payload)

        try:
            reading = self.readings.append(
                payload.get("value"),
                payload.get("timestamp"),
                payload.get("deviceId"),
            )
        except ValidationError as error:
            logger.warning(f"Rejected reading: {error}")
            return _failure(error)

        logger.debug(f"Reading stored: {reading.value} at {reading.timestamp} from '{reading.device_id or '-'}'")
        return Ack(success=True)

    # ── QUERIES ───────────────────────────────────────────────────

    def list_devices(self) -> DeviceList:
        return DeviceList(devices=self.registry.list())

    def list_readings(self, device_id: Optional[str] = None) -> ReadingList:
        # An empty filter means no filter
        return ReadingList(data_points=self.readings.list(device_id or None))

    def get_device(self, device_id: str) -> DeviceDetail:
        """
        One device and its readings, for the dashboard's device page.

        An unknown id is not an error: device is None and the list is
        whatever readings happen to carry that id (possibly none).
        """
        return DeviceDetail(
            device=self.registry.get(device_id),
            data_points=self.readings.list(device_id),
        )

    def stats(self) -> HealthStatus:
        return HealthStatus(
            status="ok",
            service=self.service_name,
            devices=self.registry.count(),
            data_points=self.readings.count(),
            capacity=self.readings.capacity,
        )

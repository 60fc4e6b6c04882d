# ─────────────────────────────────────────────────────────────────
# models.py - Data Models (Pydantic Schemas)
#
# All data shapes the collector stores and returns live here.
#
# Field names are snake_case in Python and camelCase on the wire
# (lastUpdated, deviceId, dataPoints) so the dashboard and agents
# see exactly the JSON keys they already use.
#
# Stored records are frozen: once a DeviceRecord or Reading is
# created it never changes, an update replaces the whole record.
# That is what lets the stores hand out snapshots without copying.
# ─────────────────────────────────────────────────────────────────

from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire model: camelCase aliases, populate by field name too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(CamelModel):
    """
    Geographic position reported by an agent.

    {"latitude": 37.7749, "longitude": -122.4194}
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class DeviceRecord(CamelModel):
    """
    One registered device, as stored in the DeviceRegistry.

    {
        "id": "d1",
        "ip": "10.0.0.5",
        "position": {"latitude": 1.0, "longitude": 2.0},
        "status": "online",
        "lastUpdated": "2026-03-01T10:34:22.512Z"
    }

    `status` is free text: online, idle, processing, warning and error
    are what agents send today, but nothing else is rejected.
    `last_updated` always comes from the collector's clock.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    ip: str
    position: Position
    status: str
    last_updated: datetime

    @field_serializer("last_updated", when_used="json")
    def _serialize_last_updated(self, value: datetime) -> str:
        # Millisecond precision with a Z suffix, e.g. 2026-03-01T10:34:22.512Z
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Reading(CamelModel):
    """
    One sensor reading in the ReadingLog.

    `timestamp` is the agent's own string, stored untouched.
    `device_id` is optional; readings without one are "unattributed".
    """

    model_config = ConfigDict(frozen=True)

    value: Union[int, float]
    timestamp: str
    device_id: Optional[str] = None


class Ack(CamelModel):
    """
    Result of an ingestion call.

    Success:  {"success": true, "message": "Device registered"}
    Failure:  {"success": false, "error": "Missing required fields (ip)", "fields": ["ip"]}
    """

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    fields: Optional[List[str]] = None


class DeviceList(CamelModel):
    devices: List[DeviceRecord]


class ReadingList(CamelModel):
    data_points: List[Reading]


class DeviceDetail(CamelModel):
    """A single device plus the readings tagged with its id."""

    device: Optional[DeviceRecord] = None
    data_points: List[Reading]


class HealthStatus(CamelModel):
    status: str
    service: str
    devices: int
    data_points: int
    capacity: int

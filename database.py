# ─────────────────────────────────────────────────────────────────
# database.py - In-Memory Storage
#
# This file owns all data storage for the collector:
#
#   DeviceRegistry → one DeviceRecord per device id (upsert, never delete)
#   ReadingLog     → the most recent N readings, oldest first
#
# Both are plain objects created once at startup (see main.create_app)
# and handed to the CollectorService. Nothing here is a module global.
#
# Each store has exactly one threading.Lock. Every public method takes
# it for the whole operation, so an append+evict or an upsert-replace
# is atomic. No method ever holds both stores' locks.
#
# State lives only as long as the process. Restarting the collector
# starts from empty stores.
# ─────────────────────────────────────────────────────────────────

import logging
import math
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple

from errors import ValidationError
from models import DeviceRecord, Position, Reading

logger = logging.getLogger("database")

DEFAULT_READING_CAPACITY = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_missing(value: Any) -> bool:
    # None and "" both count as absent
    return value is None or value == ""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but True is not a reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


# ─────────────────────────────────────────────────────────────────
# DEVICE REGISTRY
# ─────────────────────────────────────────────────────────────────

class DeviceRegistry:
    """
    Keyed store of device records.

    Structure:
        Key   → device id (string) e.g. "d1"
        Value → DeviceRecord (frozen, replaced on every upsert)

    A dict keeps first-registration order, and replacing the value of an
    existing key keeps its slot, so list() is stable across updates.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._devices: Dict[str, DeviceRecord] = {}

    def upsert(self, device_id, ip, position, status) -> Tuple[DeviceRecord, bool]:
        """
        Create or replace the record for `device_id`.

        Returns (record, was_created). Raises ValidationError if id, ip,
        status or position is missing, or position lacks a coordinate.
        Any caller-supplied lastUpdated is ignored: the timestamp is taken
        from the collector's clock inside the lock.
        """
        position = self._validate(device_id, ip, position, status)

        with self._lock:
            was_created = device_id not in self._devices
            record = DeviceRecord(
                id=device_id,
                ip=ip,
                position=position,
                status=status,
                last_updated=self._clock(),
            )
            self._devices[device_id] = record

        return record, was_created

    def get(self, device_id: str) -> Optional[DeviceRecord]:
        with self._lock:
            return self._devices.get(device_id)

    def list(self) -> List[DeviceRecord]:
        with self._lock:
            return list(self._devices.values())

    def count(self) -> int:
        with self._lock:
            return len(self._devices)

    @staticmethod
    def _validate(device_id, ip, position, status) -> Position:
        missing = []
        malformed = []

        for name, value in (("id", device_id), ("ip", ip), ("status", status)):
            if _is_missing(value):
                missing.append(name)
            elif not isinstance(value, str):
                malformed.append(name)

        if position is None or position == "":
            missing.append("position")
        elif not isinstance(position, Mapping):
            malformed.append("position")
        else:
            for axis in ("latitude", "longitude"):
                coordinate = position.get(axis)
                if coordinate is None:
                    missing.append(f"position.{axis}")
                elif not _is_number(coordinate):
                    malformed.append(f"position.{axis}")

        if missing or malformed:
            raise ValidationError(missing=missing, malformed=malformed)

        return Position(latitude=position["latitude"], longitude=position["longitude"])


# ─────────────────────────────────────────────────────────────────
# READING LOG
# ─────────────────────────────────────────────────────────────────

class ReadingLog:
    """
    Bounded, insertion-ordered log of readings.

    Backed by a deque with maxlen=capacity: appending to a full deque
    drops the oldest entry, so the log always holds exactly the most
    recent `capacity` readings. The bound is shared by all devices, a
    quiet device can lose its whole history to busier ones.
    """

    def __init__(self, capacity: int = DEFAULT_READING_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._readings: Deque[Reading] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, value, timestamp, device_id=None) -> Reading:
        """
        Add a reading at the end of the log, evicting from the front if full.

        Raises ValidationError if value or timestamp is missing or malformed.
        A value of 0 is a real reading and is accepted. An empty device_id is
        treated the same as no device_id.
        """
        missing = []
        malformed = []

        if _is_missing(value):
            missing.append("value")
        elif not _is_number(value):
            malformed.append("value")

        if _is_missing(timestamp):
            missing.append("timestamp")
        elif not isinstance(timestamp, str):
            malformed.append("timestamp")

        if device_id == "":
            device_id = None
        elif device_id is not None and not isinstance(device_id, str):
            malformed.append("deviceId")

        if missing or malformed:
            raise ValidationError(missing=missing, malformed=malformed)

        reading = Reading(value=value, timestamp=timestamp, device_id=device_id)

        with self._lock:
            if len(self._readings) == self._capacity:
                logger.debug(f"Reading log full ({self._capacity}), evicting oldest entry")
            self._readings.append(reading)

        return reading

    def list(self, device_id: Optional[str] = None) -> List[Reading]:
        """
        Snapshot of the log, oldest first.

        With `device_id`, only the readings tagged with that id, in log order.
        """
        with self._lock:
            snapshot = list(self._readings)

        if device_id is None:
            return snapshot
        return [reading for reading in snapshot if reading.device_id == device_id]

    def count(self) -> int:
        with self._lock:
            return len(self._readings)

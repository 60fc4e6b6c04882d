# ─────────────────────────────────────────────────────────────────
# routes/data.py - Reading Endpoints
#
# POST /api/data                → submit one reading
# GET  /api/data[?deviceId=d1]  → recent readings, oldest first
# ─────────────────────────────────────────────────────────────────

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from models import Ack, ReadingList
from routes.deps import get_collector, ingest, read_json
from service import CollectorService

router = APIRouter(
    prefix="/api/data",
    tags=["Data"]
)


@router.post("", response_model=Ack, response_model_exclude_none=True)
async def submit_reading(request: Request, collector: CollectorService = Depends(get_collector)):
    """
    Store one reading.

    {"value": 42, "timestamp": "2026-03-01T10:34:22.512Z", "deviceId": "d1"}

    deviceId may be omitted, and may name a device that never registered.
    """
    payload = await read_json(request)
    ack = ingest(collector.submit_reading, payload)

    if not ack.success:
        return JSONResponse(status_code=400, content=ack.model_dump(exclude_none=True))
    return ack


@router.get("", response_model=ReadingList, response_model_exclude_none=True)
def list_readings(
    device_id: Optional[str] = Query(None, alias="deviceId", description="Only readings tagged with this device id"),
    collector: CollectorService = Depends(get_collector),
):
    """
    Returns {"dataPoints": [...]}, at most the log capacity (100 by default).
    Unattributed readings are returned without a deviceId key.
    """
    return collector.list_readings(device_id)

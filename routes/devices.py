# ─────────────────────────────────────────────────────────────────
# routes/devices.py - Device Endpoints
#
# POST /api/devices              → register or update a device (heartbeat)
# GET  /api/devices              → every known device
# GET  /api/devices/{device_id}  → one device plus its readings
#
# This file owns HTTP request/response handling only. Validation
# lives in the stores, orchestration in service.py.
# ─────────────────────────────────────────────────────────────────

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from models import Ack, DeviceDetail, DeviceList
from routes.deps import get_collector, ingest, read_json
from service import CollectorService

router = APIRouter(
    prefix="/api/devices",
    tags=["Devices"]
)


# ─────────────────────────────────────────────────────────────────
# POST /api/devices - Register or update a device
# ─────────────────────────────────────────────────────────────────

@router.post("", response_model=Ack, response_model_exclude_none=True)
async def register_device(request: Request, collector: CollectorService = Depends(get_collector)):
    """
    Upsert a device by id.

    First call for an id   → {"success": true, "message": "Device registered"}
    Later calls for the id → {"success": true, "message": "Device updated"}
    Missing fields         → 400 {"success": false, "error": ..., "fields": [...]}
    """
    payload = await read_json(request)
    ack = ingest(collector.register_device, payload)

    if not ack.success:
        return JSONResponse(status_code=400, content=ack.model_dump(exclude_none=True))
    return ack


# ─────────────────────────────────────────────────────────────────
# GET /api/devices - List all devices
# ─────────────────────────────────────────────────────────────────

@router.get("", response_model=DeviceList)
def list_devices(collector: CollectorService = Depends(get_collector)):
    """
    Returns every device registered since the collector started.
    An empty registry is {"devices": []}, not an error.
    """
    return collector.list_devices()


# ─────────────────────────────────────────────────────────────────
# GET /api/devices/{device_id} - Device detail view
# ─────────────────────────────────────────────────────────────────

@router.get("/{device_id}", response_model=DeviceDetail)
def get_device(device_id: str, collector: CollectorService = Depends(get_collector)):
    """
    Returns {"device": {...} | null, "dataPoints": [...]}.

    Unknown ids answer 200 with device null: a reading can name a device
    that never registered, and the dashboard shows that as an empty state.
    """
    return collector.get_device(device_id)

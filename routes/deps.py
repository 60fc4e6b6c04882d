# ─────────────────────────────────────────────────────────────────
# routes/deps.py - Shared Route Dependencies
#
# get_collector → the CollectorService built once in main.create_app
#                 and kept on app.state
# read_json     → request body as parsed JSON, or BadRequestError
# ingest        → runs an ingestion call, unexpected faults become a 400
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Any, Callable

from fastapi import Request

from errors import BadRequestError, CollectorError
from models import Ack
from service import CollectorService

logger = logging.getLogger("routes")


def get_collector(request: Request) -> CollectorService:
    return request.app.state.collector


async def read_json(request: Request) -> Any:
    # Parse the body ourselves so a broken body is a plain 400,
    # not FastAPI's 422 schema error
    try:
        return await request.json()
    except ValueError as exc:
        logger.warning(f"Unreadable body on {request.url.path}: {exc}")
        raise BadRequestError() from exc


def ingest(operation: Callable[[Any], Ack], payload: Any) -> Ack:
    """
    Run an ingestion call, mapping unexpected faults to a generic 400.

    CollectorError subclasses pass through untouched; anything else is
    logged with its traceback and answered as "Invalid request body".
    """
    try:
        return operation(payload)
    except CollectorError:
        raise
    except Exception as exc:
        logger.warning(f"Ingestion failed unexpectedly: {exc!r}", exc_info=True)
        raise BadRequestError() from exc

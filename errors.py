# ─────────────────────────────────────────────────────────────────
# errors.py - Collector Exceptions
#
# ValidationError     → a submission is missing or has malformed fields.
#                       The service turns it into a failed Ack.
# BadRequestError     → the body could not even be read as a record
#                       (not JSON, or JSON that is not an object).
# ─────────────────────────────────────────────────────────────────

from typing import Iterable, List


class CollectorError(Exception):
    """Base class for every error the collector raises on purpose."""


class ValidationError(CollectorError):
    """
    Raised by the stores when a submission is incomplete or malformed.

    `missing` lists required fields that were absent or empty,
    `malformed` lists fields that were present but of the wrong shape.
    """

    def __init__(self, missing: Iterable[str] = (), malformed: Iterable[str] = ()):
        self.missing: List[str] = list(missing)
        self.malformed: List[str] = list(malformed)
        super().__init__(self._describe())

    @property
    def fields(self) -> List[str]:
        return self.missing + self.malformed

    def _describe(self) -> str:
        parts = []
        if self.missing:
            parts.append(f"Missing required fields ({', '.join(self.missing)})")
        if self.malformed:
            parts.append(f"Malformed fields ({', '.join(self.malformed)})")
        return "; ".join(parts) or "Invalid submission"


class BadRequestError(CollectorError):
    """Raised when a request body cannot be parsed into a record at all."""

    def __init__(self, detail: str = "Invalid request body"):
        self.detail = detail
        super().__init__(detail)

# ─────────────────────────────────────────────────────────────────
# logging_config.py - Logging Setup
#
# basicConfig sets the global format for ALL log messages:
#   %(asctime)s    → timestamp e.g. "2026-03-01 10:34:22"
#   %(levelname)s  → severity e.g. "INFO", "WARNING"
#   %(name)s       → which logger sent this e.g. "devices"
#   %(message)s    → the actual message
#
# Each module creates its own named logger with
# logging.getLogger("<name>") so every line shows where it came from.
# ─────────────────────────────────────────────────────────────────

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Unknown level names fall back to INFO instead of failing at startup.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""CSV and JSON import of metered energy readings.

Accepts the exporter's camelCase columns (``unitId``, ``date``, ``kwh``,
``gridIntensity``) as well as snake_case equivalents.  Rows that cannot
be parsed are skipped and logged.  Uses only stdlib parsers.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from verdant.data.models import EnergyReading

logger = logging.getLogger(__name__)

_UNIT_KEYS = ("unitid", "unit_id", "unit")
_TIME_KEYS = ("date", "timestamp", "datetime", "time")
_KWH_KEYS = ("kwh", "energy_consumed_kwh", "energy_kwh")
_INTENSITY_KEYS = ("gridintensity", "grid_intensity", "grid_carbon_intensity", "intensity")


def ingest_file(path: str | Path) -> list[EnergyReading]:
    """Read readings from a ``.csv`` or ``.json`` file."""
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Readings file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return ingest_csv(path)
    if suffix == ".json":
        return ingest_json(path)
    raise ValueError(f"Unsupported file type: {path.suffix}")


def ingest_csv(path: str | Path) -> list[EnergyReading]:
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            return []
        rows = [row for row in reader if any((v or "").strip() for v in row.values())]
    return _parse_rows(rows, str(path))


def ingest_json(path: str | Path) -> list[EnergyReading]:
    """Read a flat list of rows or ``{"readings": [...]}``."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("readings", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of readings in {path}")
    return _parse_rows(data, str(path))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_rows(rows: list[dict[str, Any]], source: str) -> list[EnergyReading]:
    readings: list[EnergyReading] = []
    skipped = 0
    for line, row in enumerate(rows, start=1):
        try:
            readings.append(parse_row(row))
        except (KeyError, ValueError, TypeError, ValidationError) as exc:
            skipped += 1
            logger.debug("Skipping row %d of %s: %s", line, source, exc)
    if skipped:
        logger.warning("Skipped %d unparseable row(s) in %s", skipped, source)
    logger.info("Ingested %d reading(s) from %s", len(readings), source)
    return readings


def parse_row(row: dict[str, Any]) -> EnergyReading:
    """Convert one raw row into an :class:`EnergyReading`."""
    normalized = {
        str(k).lower().strip(): v.strip() if isinstance(v, str) else v
        for k, v in row.items()
        if k is not None
    }
    unit_id = _first(normalized, _UNIT_KEYS)
    if not unit_id:
        raise KeyError("missing unit id")
    return EnergyReading(
        unit_id=str(unit_id),
        timestamp=_parse_timestamp(_first(normalized, _TIME_KEYS)),
        energy_consumed_kwh=float(_first(normalized, _KWH_KEYS)),
        grid_carbon_intensity=float(_first(normalized, _INTENSITY_KEYS)),
    )


def _first(row: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    raise KeyError(f"none of {', '.join(keys)} present")


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))

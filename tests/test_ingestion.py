# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for CSV/JSON reading ingestion."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import pytest

from verdant.data.ingestion import ingest_csv, ingest_file, ingest_json, parse_row


class TestParseRow:

    def test_camel_case_row(self):
        reading = parse_row(
            {"unitId": "unit_101", "date": "2025-03-04", "kwh": "12.5", "gridIntensity": "0.4"}
        )
        assert reading.unit_id == "unit_101"
        assert reading.timestamp == datetime(2025, 3, 4, tzinfo=timezone.utc)
        assert reading.emissions_kg == pytest.approx(5.0)

    def test_snake_case_row(self):
        reading = parse_row(
            {
                "unit_id": "u2",
                "timestamp": "2025-03-04T10:30:00Z",
                "energy_consumed_kwh": 8,
                "grid_carbon_intensity": 0.5,
            }
        )
        assert reading.timestamp.hour == 10
        assert reading.emissions_kg == pytest.approx(4.0)

    def test_missing_unit_raises(self):
        with pytest.raises(KeyError):
            parse_row({"date": "2025-03-04", "kwh": "1", "gridIntensity": "0.4"})


class TestIngestCSV:

    def test_reads_rows(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text(
            "unitId,date,kwh,gridIntensity\n"
            "unit_101,2025-03-01,10,0.4\n"
            "unit_102,2025-03-01,20,0.5\n"
        )
        readings = ingest_csv(path)
        assert [r.unit_id for r in readings] == ["unit_101", "unit_102"]
        assert readings[1].emissions_kg == pytest.approx(10.0)

    def test_bad_rows_skipped(self, tmp_path, caplog):
        path = tmp_path / "readings.csv"
        path.write_text(
            "unitId,date,kwh,gridIntensity\n"
            "unit_101,2025-03-01,10,0.4\n"
            "unit_101,not-a-date,10,0.4\n"
            "unit_101,2025-03-02,-5,0.4\n"
            ",,,\n"
        )
        with caplog.at_level(logging.WARNING, logger="verdant.data.ingestion"):
            readings = ingest_csv(path)
        assert len(readings) == 1
        assert "Skipped 2" in caplog.text

    def test_header_only(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("unitId,date,kwh,gridIntensity\n")
        assert ingest_csv(path) == []


class TestIngestJSON:

    def test_list_payload(self, tmp_path):
        path = tmp_path / "readings.json"
        path.write_text(json.dumps([
            {"unitId": "u1", "date": "2025-03-01", "kwh": 10, "gridIntensity": 0.42},
        ]))
        readings = ingest_json(path)
        assert len(readings) == 1
        assert readings[0].emissions_kg == pytest.approx(4.2)

    def test_wrapped_payload(self, tmp_path):
        path = tmp_path / "readings.json"
        path.write_text(json.dumps({"readings": [
            {"unit_id": "u1", "timestamp": "2025-03-01T00:00:00", "kwh": 1, "intensity": 0.4},
            {"unit_id": "u2", "timestamp": "2025-03-01T00:00:00", "kwh": 2, "intensity": 0.4},
        ]}))
        assert [r.unit_id for r in ingest_json(path)] == ["u1", "u2"]

    def test_scalar_payload_rejected(self, tmp_path):
        path = tmp_path / "readings.json"
        path.write_text("42")
        with pytest.raises(ValueError):
            ingest_json(path)


class TestIngestFile:

    def test_dispatch_on_suffix(self, tmp_path):
        path = tmp_path / "READINGS.CSV"
        path.write_text("unitId,date,kwh,gridIntensity\nu1,2025-03-01,1,0.4\n")
        assert len(ingest_file(path)) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ingest_file(tmp_path / "nope.csv")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "readings.xlsx"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported file type"):
            ingest_file(path)

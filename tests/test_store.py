# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the in-memory repository."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from verdant.data.models import Tenant
from verdant.data.store import InMemoryStore, TenantNotFoundError, UnitNotFoundError


@pytest.fixture()
def store(make_unit, make_reading) -> InMemoryStore:
    units = [
        make_unit("a"),
        make_unit("b"),
        make_unit("c", building_id="b2"),
    ]
    tenants = [
        Tenant(id="t1", unit_id="a", display_name="Ann", contact_email="ann@example.com"),
        Tenant(id="t2", unit_id="c", display_name="Cal", contact_email="cal@example.com"),
    ]
    readings = [
        make_reading("a", day=28, month=2),
        make_reading("a", day=1),
        make_reading("b", day=5),
    ]
    return InMemoryStore(units, tenants, readings)


class TestUnits:

    def test_find_by_building(self, store):
        assert [u.id for u in store.find_units("b1")] == ["a", "b"]
        assert len(store.find_units()) == 3

    def test_get_unit(self, store):
        assert store.get_unit("c").building_id == "b2"

    def test_missing_unit(self, store):
        assert store.find_unit("zzz") is None
        with pytest.raises(UnitNotFoundError, match="Unit not found: zzz") as exc_info:
            store.get_unit("zzz")
        assert exc_info.value.unit_id == "zzz"

    def test_not_found_is_lookup_error(self, store):
        with pytest.raises(LookupError):
            store.get_unit("zzz")


class TestTenants:

    def test_find_by_single_unit(self, store):
        assert [t.id for t in store.find_tenants("a")] == ["t1"]

    def test_find_by_unit_set(self, store):
        assert {t.id for t in store.find_tenants({"a", "b", "c"})} == {"t1", "t2"}

    def test_tenant_for_unit(self, store):
        assert store.find_tenant_for_unit("c").id == "t2"
        assert store.find_tenant_for_unit("b") is None

    def test_missing_tenant(self, store):
        with pytest.raises(TenantNotFoundError, match="Tenant not found: t9"):
            store.get_tenant("t9")


class TestReadings:

    def test_filter_by_unit(self, store):
        assert len(store.find_readings("a")) == 2
        assert len(store.find_readings({"a", "b"})) == 3

    def test_since_is_inclusive(self, store):
        since = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert len(store.find_readings(since=since)) == 2
        assert len(store.find_readings("a", since=since)) == 1

    def test_naive_since_is_utc(self, store):
        since = datetime(2025, 3, 1, 12, 0)
        assert store.find_readings(since=since) == store.find_readings(
            since=since.replace(tzinfo=timezone.utc)
        )

    def test_add_readings(self, store, make_reading):
        added = store.add_readings([make_reading("c"), make_reading("c", day=11)])
        assert added == 2
        assert len(store.find_readings("c")) == 2

    def test_clear(self, store):
        store.clear()
        assert store.units == [] and store.tenants == [] and store.readings == []

    def test_lock_is_reentrant(self, store):
        with store.lock:
            with store.lock:
                store.add_readings([])

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""In-process repository for units, tenants, and energy readings.

Queries follow simple filter semantics (units by building, tenants by
unit, readings by unit and ``since``).  The store is volatile: nothing
is written to disk.  ``lock`` is the exclusive section shared by the
batch recompute and readers that need a consistent snapshot.
"""

from __future__ import annotations

import threading
from collections.abc import Collection, Iterable
from datetime import datetime

from verdant.data.models import EnergyReading, Tenant, Unit, as_utc


class UnitNotFoundError(LookupError):
    """Raised when a unit id does not exist."""

    def __init__(self, unit_id: str) -> None:
        super().__init__(f"Unit not found: {unit_id}")
        self.unit_id = unit_id


class TenantNotFoundError(LookupError):
    """Raised when a tenant id does not exist."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(f"Tenant not found: {tenant_id}")
        self.tenant_id = tenant_id


class InMemoryStore:
    """List-backed repository with a re-entrant lock."""

    def __init__(
        self,
        units: Iterable[Unit] = (),
        tenants: Iterable[Tenant] = (),
        readings: Iterable[EnergyReading] = (),
    ) -> None:
        self.units: list[Unit] = list(units)
        self.tenants: list[Tenant] = list(tenants)
        self.readings: list[EnergyReading] = list(readings)
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def find_units(self, building_id: str | None = None) -> list[Unit]:
        if building_id is None:
            return list(self.units)
        return [u for u in self.units if u.building_id == building_id]

    def find_unit(self, unit_id: str) -> Unit | None:
        return next((u for u in self.units if u.id == unit_id), None)

    def get_unit(self, unit_id: str) -> Unit:
        unit = self.find_unit(unit_id)
        if unit is None:
            raise UnitNotFoundError(unit_id)
        return unit

    # ------------------------------------------------------------------
    # Tenants
    # ------------------------------------------------------------------

    def find_tenants(
        self, unit_ids: str | Collection[str] | None = None
    ) -> list[Tenant]:
        """Tenants, optionally restricted to one unit id or a set of them."""
        if unit_ids is None:
            return list(self.tenants)
        if isinstance(unit_ids, str):
            unit_ids = {unit_ids}
        return [t for t in self.tenants if t.unit_id in unit_ids]

    def find_tenant_for_unit(self, unit_id: str) -> Tenant | None:
        return next((t for t in self.tenants if t.unit_id == unit_id), None)

    def get_tenant(self, tenant_id: str) -> Tenant:
        tenant = next((t for t in self.tenants if t.id == tenant_id), None)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------

    def find_readings(
        self,
        unit_ids: str | Collection[str] | None = None,
        since: datetime | None = None,
    ) -> list[EnergyReading]:
        """Readings filtered by unit id(s) and ``timestamp >= since``."""
        results = list(self.readings)
        if unit_ids is not None:
            if isinstance(unit_ids, str):
                unit_ids = {unit_ids}
            results = [r for r in results if r.unit_id in unit_ids]
        if since is not None:
            since = as_utc(since)
            results = [r for r in results if r.timestamp >= since]
        return results

    def add_readings(self, readings: Iterable[EnergyReading]) -> int:
        """Append readings; returns how many were added."""
        new = list(readings)
        with self.lock:
            self.readings.extend(new)
        return len(new)

    def clear(self) -> None:
        with self.lock:
            self.units.clear()
            self.tenants.clear()
            self.readings.clear()

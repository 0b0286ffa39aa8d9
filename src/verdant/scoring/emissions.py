# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Emissions arithmetic.

All functions are pure and perform no validation: negative inputs
propagate to negative outputs.  Bounds are enforced by the models.
"""

from __future__ import annotations

# Medical accommodations get a larger occupancy allowance.
MEDICAL_OCCUPANCY_MULTIPLIER = 1.5


def compute_emissions(energy_kwh: float, carbon_intensity: float) -> float:
    """Carbon-equivalent mass in kg: ``energy_kwh * carbon_intensity``."""
    return energy_kwh * carbon_intensity


def occupancy_factor(occupancy_count: int, medical_flag: bool) -> float:
    """Occupancy divisor used by the normalized-improvement formula.

    At least one occupant is always assumed; the medical flag scales the
    factor by 1.5.
    """
    base = max(1, occupancy_count)
    return base * MEDICAL_OCCUPANCY_MULTIPLIER if medical_flag else float(base)


def normalize_emissions(
    emissions_kg: float,
    floor_area: float,
    occupancy_count: int,
    medical_flag: bool,
) -> float:
    """Emissions per square foot per (weighted) occupant.

    Returns 0.0 when the divisor is not positive.
    """
    divisor = floor_area * occupancy_factor(occupancy_count, medical_flag)
    if divisor <= 0:
        return 0.0
    return emissions_kg / divisor

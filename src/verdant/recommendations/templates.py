# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Suggestion template definitions.

Each template carries a stable id, a static title, a description
template with ``{placeholder}`` fields, the end-use category it targets,
and the fraction of that category's emissions it is expected to save.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SuggestionTemplate:
    """Immutable template for a single suggestion."""

    id: str
    title: str
    description_template: str
    category: str  # breakdown key: hvac, lights, water, appliances, other
    savings_fraction: float
    difficulty: str  # "Easy", "Medium", "Hard"
    xp: int


THERMOSTAT_SETBACK = SuggestionTemplate(
    id="hvac-setback",
    title="Set the thermostat back 2 degrees",
    description_template=(
        "Heating and cooling account for {share:.0f}% of your emissions "
        "({category_kg:.1f} kg CO2e this month). A 2-degree setback while "
        "you are asleep or away could save about {impact:.1f} kg CO2e a month."
    ),
    category="hvac",
    savings_fraction=0.10,
    difficulty="Easy",
    xp=15,
)

HVAC_FILTER = SuggestionTemplate(
    id="hvac-filter",
    title="Replace or clean the HVAC filter",
    description_template=(
        "A clogged filter makes the system work harder. Cleaning it "
        "could trim around {impact:.1f} kg CO2e a month from your "
        "{category_kg:.1f} kg HVAC total."
    ),
    category="hvac",
    savings_fraction=0.05,
    difficulty="Medium",
    xp=20,
)

LED_SWAP = SuggestionTemplate(
    id="lights-led",
    title="Switch remaining bulbs to LED",
    description_template=(
        "Lighting is {share:.0f}% of your footprint. LEDs use far less "
        "energy and could save roughly {impact:.1f} kg CO2e a month."
    ),
    category="lights",
    savings_fraction=0.30,
    difficulty="Easy",
    xp=10,
)

SHORTER_SHOWERS = SuggestionTemplate(
    id="water-showers",
    title="Cut two minutes from each shower",
    description_template=(
        "Water heating produces {category_kg:.1f} kg CO2e a month. Shorter "
        "showers could save about {impact:.1f} kg CO2e."
    ),
    category="water",
    savings_fraction=0.15,
    difficulty="Easy",
    xp=10,
)

COLD_WASH = SuggestionTemplate(
    id="appliances-cold-wash",
    title="Wash laundry on cold",
    description_template=(
        "Appliances make up {share:.0f}% of your emissions. Cold cycles "
        "avoid water heating and could save about {impact:.1f} kg CO2e a month."
    ),
    category="appliances",
    savings_fraction=0.20,
    difficulty="Easy",
    xp=10,
)

STANDBY_POWER = SuggestionTemplate(
    id="other-standby",
    title="Kill standby power with a smart strip",
    description_template=(
        "Idle electronics quietly add up. Switching them off at the strip "
        "could save around {impact:.1f} kg CO2e a month."
    ),
    category="other",
    savings_fraction=0.25,
    difficulty="Medium",
    xp=15,
)

ALL_TEMPLATES: tuple[SuggestionTemplate, ...] = (
    THERMOSTAT_SETBACK,
    HVAC_FILTER,
    LED_SWAP,
    SHORTER_SHOWERS,
    COLD_WASH,
    STANDBY_POWER,
)

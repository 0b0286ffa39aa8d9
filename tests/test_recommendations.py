# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the suggestion engine."""

from __future__ import annotations

import pytest

from verdant.data.models import Suggestion, UsageBreakdown
from verdant.recommendations.engine import SuggestionEngine
from verdant.recommendations.templates import ALL_TEMPLATES


@pytest.fixture()
def breakdown() -> UsageBreakdown:
    return UsageBreakdown(hvac=45, lights=20, water=15, appliances=12, other=8)


class TestTemplates:

    def test_ids_unique(self):
        ids = [t.id for t in ALL_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_categories_match_breakdown(self, breakdown):
        categories = set(breakdown.model_dump())
        assert all(t.category in categories for t in ALL_TEMPLATES)

    def test_savings_fractions(self):
        assert all(0 < t.savings_fraction < 1 for t in ALL_TEMPLATES)


class TestSuggestionEngine:

    def test_ranked_by_impact(self, breakdown):
        suggestions = SuggestionEngine().generate(breakdown)
        assert [s.id for s in suggestions[:3]] == [
            "lights-led", "hvac-setback", "appliances-cold-wash",
        ]
        impacts = [s.impact_kg for s in suggestions]
        assert impacts == sorted(impacts, reverse=True)

    def test_limit(self, breakdown):
        assert len(SuggestionEngine().generate(breakdown)) == 4
        assert len(SuggestionEngine(limit=2).generate(breakdown)) == 2
        assert len(SuggestionEngine(limit=10).generate(breakdown)) == len(ALL_TEMPLATES)

    def test_impact_from_category(self, breakdown):
        led = next(s for s in SuggestionEngine().generate(breakdown) if s.id == "lights-led")
        assert led.impact_kg == pytest.approx(6.0)
        assert led.category == "lights"

    def test_acknowledged_filtered(self, breakdown):
        suggestions = SuggestionEngine().generate(breakdown, acknowledged={"lights-led"})
        assert "lights-led" not in {s.id for s in suggestions}
        assert suggestions[0].id == "hvac-setback"

    def test_all_acknowledged(self, breakdown):
        every = {t.id for t in ALL_TEMPLATES}
        assert SuggestionEngine().generate(breakdown, acknowledged=every) == []

    def test_zero_breakdown(self):
        empty = UsageBreakdown(hvac=0, lights=0, water=0, appliances=0, other=0)
        suggestions = SuggestionEngine().generate(empty)
        assert all(s.impact_kg == 0 for s in suggestions)

    def test_returns_models(self, breakdown):
        for s in SuggestionEngine().generate(breakdown):
            assert isinstance(s, Suggestion)
            assert s.difficulty in {"Easy", "Medium", "Hard"}
            assert s.description

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Suggestion engine.

Turns a tenant's emissions breakdown into a ranked list of
:class:`~verdant.data.models.Suggestion` objects.  Suggestions are
advisory only and never feed back into scoring.
"""

from __future__ import annotations

from collections.abc import Collection

from verdant.data.models import Suggestion, UsageBreakdown
from verdant.recommendations.templates import ALL_TEMPLATES, SuggestionTemplate

# Maximum number of suggestions to return.
_MAX_SUGGESTIONS = 4


class SuggestionEngine:
    """Generate ranked suggestions from an emissions breakdown.

    Usage::

        engine = SuggestionEngine()
        suggestions = engine.generate(breakdown, acknowledged={"lights-led"})
    """

    def __init__(
        self,
        templates: tuple[SuggestionTemplate, ...] = ALL_TEMPLATES,
        limit: int = _MAX_SUGGESTIONS,
    ) -> None:
        self.templates = templates
        self.limit = limit

    def generate(
        self,
        breakdown: UsageBreakdown,
        acknowledged: Collection[str] = (),
    ) -> list[Suggestion]:
        """Rank unacknowledged templates by estimated impact, descending.

        Ties keep catalogue order.
        """
        amounts = breakdown.model_dump()
        shares = breakdown.shares()
        candidates: list[Suggestion] = []

        for template in self.templates:
            if template.id in acknowledged:
                continue
            category_kg = amounts.get(template.category, 0.0)
            impact = round(category_kg * template.savings_fraction, 2)
            description = template.description_template.format(
                share=shares.get(template.category, 0.0) * 100,
                category_kg=category_kg,
                impact=impact,
            )
            candidates.append(
                Suggestion(
                    id=template.id,
                    title=template.title,
                    description=description,
                    category=template.category,
                    impact_kg=max(0.0, impact),
                    difficulty=template.difficulty,
                    xp=template.xp,
                )
            )

        candidates.sort(key=lambda s: s.impact_kg, reverse=True)
        return candidates[: self.limit]

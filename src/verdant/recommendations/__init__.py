# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Rule-based energy-saving suggestions for tenants."""

from verdant.recommendations.engine import SuggestionEngine

__all__ = ["SuggestionEngine"]

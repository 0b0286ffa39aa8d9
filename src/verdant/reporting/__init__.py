# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Reporting modules for terminal and CSV output."""

from verdant.reporting.export import render_csv
from verdant.reporting.terminal import TerminalRenderer

__all__ = ["TerminalRenderer", "render_csv"]

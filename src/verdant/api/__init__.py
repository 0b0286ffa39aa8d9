# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""REST interface for landlord and tenant dashboards."""

from verdant.api.server import create_app

__all__ = ["create_app"]

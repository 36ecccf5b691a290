"""
Render component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class ViewCounterPort(Protocol):
    """Atomic view counter, normally the Publishing Resolver."""

    def increment_views(self, portfolio_id: str) -> int:
        """Add one view and return the new total."""
        ...

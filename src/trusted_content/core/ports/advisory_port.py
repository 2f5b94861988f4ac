from __future__ import annotations

from typing import Protocol

from ..domain.models import AdvisorySummary


class AdvisoryPort(Protocol):
    async def fetch_summary(self, identifier: str) -> AdvisorySummary | None:
        """Return advisory details for the identifier, or None when unavailable.

        Implementations must not raise for transport or payload problems.
        """
        ...

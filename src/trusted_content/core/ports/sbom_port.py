from __future__ import annotations

from typing import Protocol


class SbomPort(Protocol):
    def lookup(self, purl: str) -> dict | None:
        """Return the SBOM document registered for the exact purl, or None."""
        ...

from __future__ import annotations

from ..domain.exceptions import MissingQueryArgumentError
from ..domain.models import Vulnerability
from ..services.resolver import TrustResolver


class GetVulnerabilityUseCase:
    def __init__(self, resolver: TrustResolver) -> None:
        self._resolver = resolver

    async def execute(self, identifier: str | None) -> Vulnerability:
        if not identifier or not identifier.strip():
            raise MissingQueryArgumentError()
        return await self._resolver.resolve_vulnerability_detail(identifier.strip())

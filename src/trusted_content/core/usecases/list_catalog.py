from __future__ import annotations

from ..domain.models import Package
from ..services.resolver import TrustResolver


class ListCatalogUseCase:
    def __init__(self, resolver: TrustResolver) -> None:
        self._resolver = resolver

    async def execute(self) -> list[Package]:
        return await self._resolver.resolve_catalog()
